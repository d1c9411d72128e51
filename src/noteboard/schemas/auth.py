# src/noteboard/schemas/auth.py
"""Authentication request and response schemas."""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Credentials; ``username`` may also be the account's email."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Access token returned on login and refresh."""

    access_token: str
    token_type: str = "bearer"


class ForgotPasswordRequest(BaseModel):
    """Request a password reset link for an email address."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Set a new password using a token from a reset link."""

    token: str = Field(..., min_length=1)
    password: str = Field(..., pattern=r"^[A-Za-z0-9!@#$%]{4,12}$")
