# src/noteboard/schemas/user.py
"""User-related Pydantic schemas."""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_PATTERN = re.compile(r"^[A-Za-z0-9!@#$%]{4,12}$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20


def _check_password(value: str) -> str:
    if not PASSWORD_PATTERN.fullmatch(value):
        raise ValueError(
            "Password must be 4-12 characters and only contain letters, numbers, and !@#$%"
        )
    return value


class UserCreate(BaseModel):
    """Schema for public registration.

    Roles are not accepted here; new accounts always start with the default
    roles and only a manager can change them afterwards.
    """

    username: str = Field(..., min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str) -> str:
        return _check_password(value)


class UserUpdate(BaseModel):
    """Schema for updating an account; ``password`` is optional."""

    id: int
    username: str = Field(..., min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    roles: list[str] = Field(..., min_length=1)
    active: bool
    password: str | None = None

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        return _check_password(value)


class UserResponse(BaseModel):
    """Public view of an account; the password hash is never exposed."""

    id: int
    username: str
    email: str
    roles: list[str]
    active: bool

    model_config = ConfigDict(from_attributes=True)
