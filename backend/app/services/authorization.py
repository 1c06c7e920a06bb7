from collections.abc import Mapping
from dataclasses import dataclass
from typing import AbstractSet, Any, Iterable, Union

FORBIDDEN = "Forbidden"

MEMBER_ROLES = frozenset({"user", "admin"})
ADMIN_ROLES = frozenset({"admin"})


@dataclass(frozen=True)
class Accept:
    allowed: bool = True


@dataclass(frozen=True)
class Reject:
    kind: str = FORBIDDEN
    allowed: bool = False


Decision = Union[Accept, Reject]


def _roles_of(claims: Any):
    if isinstance(claims, Mapping):
        return claims.get("roles")
    return getattr(claims, "roles", None)


def authorize(claims: Any, required_roles: AbstractSet[str]) -> Decision:
    """
    Decide whether ``claims`` satisfy ``required_roles``.

    Accepts only when claims are present and carry a non-empty list/tuple of
    roles that intersects ``required_roles``. Matching is exact and
    case-sensitive; a bare string is not treated as a one-element sequence.
    Never raises; transport adaptation is left to the caller.
    """
    if claims is None:
        return Reject()
    roles = _roles_of(claims)
    if not isinstance(roles, (list, tuple)) or not roles:
        return Reject()
    if any(isinstance(r, str) and r in required_roles for r in roles):
        return Accept()
    return Reject()


class AuthorizationGate:
    def __init__(self, required_roles: Iterable[str]):
        self.required_roles = frozenset(required_roles)

    def __call__(self, claims: Any) -> Decision:
        return authorize(claims, self.required_roles)

    def __repr__(self):
        return f"<AuthorizationGate roles={sorted(self.required_roles)}>"


member_gate = AuthorizationGate(MEMBER_ROLES)
admin_gate = AuthorizationGate(ADMIN_ROLES)
