import re
from typing import Dict, List, Tuple

from pydantic import BaseModel, Field, field_validator

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8

MESSAGES: Dict[Tuple[str, str], str] = {
    ("email", "missing"): "Email is required",
    ("email", "string_type"): "Please provide a valid email address",
    ("password", "missing"): "Password is required",
    ("password", "string_type"): "Password must be a string",
    ("password", "string_too_short"): "Password cannot be empty",
}


class RegisterIn(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Please provide a valid email address")
        return v


class LoginIn(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return v.strip().lower()


class UserOut(BaseModel):
    id: int
    email: str
    roles: List[str]
