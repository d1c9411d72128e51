# src/noteboard/api/v1/endpoints/auth.py
"""Authentication endpoints for the Noteboard API."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from fastapi import APIRouter, Request, Response, status

from noteboard.api.v1.dependencies import AuthServiceDep, SettingsDep
from noteboard.core.settings import Settings
from noteboard.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    TokenResponse,
)
from noteboard.schemas.common import Message

router = APIRouter(prefix="/auth", tags=["authentication"])

RESET_LINK_SENT = "If that email is registered, a reset link has been sent."


def _cookie_flags(app_settings: Settings) -> tuple[bool, Literal["lax", "none"]]:
    # Cross-site frontends need SameSite=None, which browsers only accept on secure cookies.
    if app_settings.is_production:
        return True, "none"
    return False, "lax"


@router.post("", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    auth: AuthServiceDep,
    app_settings: SettingsDep,
) -> TokenResponse:
    """Exchange credentials for an access token and set the refresh cookie."""
    tokens = auth.login(credentials.username, credentials.password)
    secure, samesite = _cookie_flags(app_settings)
    response.set_cookie(
        key=app_settings.refresh_cookie_name,
        value=tokens.refresh_token,
        max_age=int(timedelta(days=app_settings.refresh_token_expire_days).total_seconds()),
        httponly=True,
        secure=secure,
        samesite=samesite,
    )
    return TokenResponse(access_token=tokens.access_token)


@router.get("/refresh", response_model=TokenResponse)
async def refresh(request: Request, auth: AuthServiceDep, app_settings: SettingsDep) -> TokenResponse:
    """Issue a new access token from the refresh cookie."""
    access_token = auth.refresh(request.cookies.get(app_settings.refresh_cookie_name))
    return TokenResponse(access_token=access_token)


@router.post("/logout", response_model=Message)
async def logout(request: Request, app_settings: SettingsDep) -> Response:
    """Clear the refresh cookie; replies 204 when there is nothing to clear."""
    if not request.cookies.get(app_settings.refresh_cookie_name):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    secure, samesite = _cookie_flags(app_settings)
    response = Response(
        content=Message(message="Cookie cleared").model_dump_json(),
        media_type="application/json",
    )
    response.delete_cookie(
        key=app_settings.refresh_cookie_name,
        httponly=True,
        secure=secure,
        samesite=samesite,
    )
    return response


@router.post("/forgot-password", response_model=Message)
async def forgot_password(payload: ForgotPasswordRequest, auth: AuthServiceDep) -> Message:
    """Mail a reset link; the reply is the same whether or not the email is known."""
    auth.forgot_password(str(payload.email))
    return Message(message=RESET_LINK_SENT)


@router.post("/reset-password", response_model=Message)
async def reset_password(payload: ResetPasswordRequest, auth: AuthServiceDep) -> Message:
    """Set a new password using a valid, unexpired reset token."""
    auth.reset_password(payload.token, payload.password)
    return Message(message="Password has been reset successfully")
