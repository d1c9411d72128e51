"""Login, token refresh and password reset."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta

from fastapi import status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from noteboard.core import security
from noteboard.core.errors import Forbidden, NoteboardError, Unauthorized, ValidationError
from noteboard.core.settings import Settings
from noteboard.db.time import utcnow
from noteboard.models import User
from noteboard.repositories import Collection
from noteboard.services.mailer import MailDeliveryError, Mailer

logger = logging.getLogger(__name__)

__all__ = ["AuthService", "IssuedTokens", "MailError"]


class MailError(NoteboardError):
    """The reset mail could not be sent."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@dataclass(frozen=True)
class IssuedTokens:
    """Access token for the response body and refresh token for the cookie."""

    access_token: str
    refresh_token: str


class AuthService:
    """Service issuing tokens and handling password resets."""

    def __init__(self, db: Session, settings: Settings, mailer: Mailer | None = None) -> None:
        self.db = db
        self.settings = settings
        self.mailer = mailer
        self.users = Collection(db, User)

    def _access_token_for(self, user: User) -> str:
        return security.create_access_token(user.id, user.username, list(user.roles or []))

    def login(self, username: str, password: str) -> IssuedTokens:
        """Authenticate by username or email.

        Raises:
            Unauthorized: If the account is unknown, inactive or the password is wrong.
        """
        stmt = select(User).where(or_(User.username == username, User.email == username))
        user = self.db.execute(stmt.limit(1)).scalars().first()
        if user is None or not user.active:
            raise Unauthorized("Unauthorized")
        if not security.verify_password(password, user.password_hash):
            raise Unauthorized("Unauthorized")
        logger.info("User %s logged in", user.id)
        return IssuedTokens(
            access_token=self._access_token_for(user),
            refresh_token=security.create_refresh_token(user.username),
        )

    def refresh(self, refresh_token: str | None) -> str:
        """Return a new access token for a valid refresh token.

        Raises:
            Unauthorized: If the cookie is missing or its user no longer exists.
            Forbidden: If the token is invalid or expired.
        """
        if not refresh_token:
            raise Unauthorized("Unauthorized")
        claims = security.decode_refresh_token(refresh_token)
        if claims is None or not claims.get("username"):
            raise Forbidden("Forbidden")
        user = self.users.find_one(username=claims["username"])
        if user is None:
            raise Unauthorized("Unauthorized")
        return self._access_token_for(user)

    def forgot_password(self, email: str) -> None:
        """Store a one-hour reset token and mail a reset link.

        Unknown addresses are ignored silently so callers cannot tell which addresses have accounts.
        """
        user = self.users.find_one_ci("email", email)
        if user is None:
            logger.info("Password reset requested for unknown address")
            return
        token = secrets.token_hex(32)
        user.reset_token = token
        user.reset_token_expiry = utcnow() + timedelta(minutes=self.settings.reset_token_expire_minutes)
        self.db.commit()

        reset_url = f"{self.settings.frontend_url.rstrip('/')}/reset-password/{token}"
        body = (
            f"You requested a password reset. Click the link to reset your password: {reset_url}\n"
            "If you did not request this, please ignore this email."
        )
        if self.mailer is None:
            raise MailError("Error sending email")
        try:
            self.mailer.send(user.email, "Password Reset Request", body)
        except MailDeliveryError as err:
            logger.error("Could not send reset mail to user %s: %s", user.id, err)
            raise MailError("Error sending email") from err

    def reset_password(self, token: str, password: str) -> None:
        """Replace the password of the account holding an unexpired reset token.

        Raises:
            ValidationError: If the token is unknown or expired, or the password is unchanged.
        """
        stmt = select(User).where(User.reset_token == token, User.reset_token_expiry > utcnow())
        user = self.db.execute(stmt.limit(1)).scalars().first()
        if user is None:
            raise ValidationError("Invalid or expired token")
        if security.verify_password(password, user.password_hash):
            raise ValidationError("New password must be different from the current password.")
        user.password_hash = security.hash_password(password)
        user.reset_token = None
        user.reset_token_expiry = None
        self.db.commit()
        logger.info("Password reset for user %s", user.id)
