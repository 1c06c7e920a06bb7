from types import SimpleNamespace

import pytest

from app.services.authorization import (
    ADMIN_ROLES,
    FORBIDDEN,
    MEMBER_ROLES,
    Accept,
    Reject,
    admin_gate,
    authorize,
    member_gate,
)


@pytest.mark.parametrize("roles", [["user"], ["admin"], ["user", "admin"], ["guest", "user"]])
def test_member_gate_accepts_user_or_admin(roles):
    assert isinstance(member_gate({"roles": roles}), Accept)


def test_admin_gate_rejects_plain_user():
    decision = admin_gate({"roles": ["user"]})
    assert isinstance(decision, Reject)
    assert decision.kind == FORBIDDEN
    assert decision.allowed is False


def test_admin_gate_accepts_admin():
    assert admin_gate({"roles": ["admin"]}).allowed is True


@pytest.mark.parametrize(
    "claims",
    [
        None,
        {},
        {"roles": None},
        {"roles": []},
        {"roles": "admin"},
        {"roles": "user"},
        {"roles": {"admin": True}},
        {"roles": [1, None]},
    ],
)
def test_both_gates_reject_missing_or_malformed_roles(claims):
    assert isinstance(member_gate(claims), Reject)
    assert isinstance(admin_gate(claims), Reject)


def test_role_matching_is_case_sensitive():
    assert isinstance(admin_gate({"roles": ["ADMIN"]}), Reject)
    assert isinstance(member_gate({"roles": ["User"]}), Reject)


def test_roles_without_intersection_are_rejected():
    assert isinstance(authorize({"roles": ["guest"]}, MEMBER_ROLES), Reject)


def test_claims_may_be_an_object_with_roles():
    claims = SimpleNamespace(roles=("admin",))
    assert isinstance(authorize(claims, ADMIN_ROLES), Accept)
    assert isinstance(authorize(SimpleNamespace(), ADMIN_ROLES), Reject)
