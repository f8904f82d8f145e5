"""Registration and login payloads."""

from __future__ import annotations

import re

from pydantic import Field, field_validator

from ..forms import FormModel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")


class LoginForm(FormModel):
    email: str = Field(max_length=255)
    password: str = Field(default="")

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("Please provide a valid email address")
        return value.lower()

    @field_validator("password")
    @classmethod
    def require_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class RegisterForm(LoginForm):
    """New account payload with password strength rules."""

    name: str = Field(min_length=2, max_length=50)

    @field_validator("password")
    @classmethod
    def validate_strength(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters long")
        if not re.search(r"[A-Z]", value):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", value):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"[0-9]", value):
            raise ValueError("Password must contain at least one number")
        return value


__all__ = ["LoginForm", "RegisterForm"]
