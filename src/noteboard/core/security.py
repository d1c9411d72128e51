"""Token and password helpers."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from noteboard.core.settings import settings
from noteboard.db.time import utcnow

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass(frozen=True)
class Identity:
    """Verified caller identity resolved from an access token."""

    id: int
    username: str
    roles: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Identity | None:
        """Build an identity from decoded access token claims, or None if incomplete."""
        subject = claims.get("sub")
        username = claims.get("username")
        if subject is None or not username:
            return None
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            return None
        return cls(id=user_id, username=str(username), roles=tuple(claims.get("roles") or ()))


def hash_password(password: str) -> str:
    """Return a salted hash of ``password``."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True when ``plain_password`` matches the stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: int,
    username: str,
    roles: list[str],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a short-lived access token carrying the caller's identity.

    Args:
        user_id: Primary key of the user; stored as the ``sub`` claim.
        username: Username at the time of issue.
        roles: Role names granted to the user.
        expires_delta: Optional lifetime override.

    Returns:
        Encoded JWT string.
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "username": username,
        "roles": list(roles),
        "exp": utcnow() + lifetime,
    }
    return jwt.encode(payload, settings.access_token_secret, algorithm=settings.jwt_algorithm)


def create_refresh_token(username: str, expires_delta: timedelta | None = None) -> str:
    """Create a long-lived refresh token stored in an httpOnly cookie."""
    lifetime = expires_delta or timedelta(days=settings.refresh_token_expire_days)
    payload = {"username": username, "exp": utcnow() + lifetime}
    return jwt.encode(payload, settings.refresh_token_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Return the access token claims, or None if the token is invalid or expired."""
    try:
        return jwt.decode(token, settings.access_token_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def decode_refresh_token(token: str) -> dict[str, Any] | None:
    """Return the refresh token claims, or None if the token is invalid or expired."""
    try:
        return jwt.decode(token, settings.refresh_token_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
