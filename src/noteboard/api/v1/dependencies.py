"""Shared API dependencies for authentication and service construction."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from noteboard.core import security
from noteboard.core.security import Identity
from noteboard.core.settings import Settings, settings
from noteboard.db.session import get_db, get_session_factory
from noteboard.services.auth import AuthService
from noteboard.services.likes import LikeLedger
from noteboard.services.mailer import Mailer, build_mailer
from noteboard.services.notifications import NotificationDispatcher
from noteboard.services.posts import PostService, SessionFactory
from noteboard.services.users import UserService

# HTTP Bearer scheme; errors are raised below so the cookie fallback can run
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_settings() -> Settings:
    """Return the process-wide settings."""
    return settings


def get_mailer(request: Request) -> Mailer:
    """Return the mailer built at startup, creating one if startup did not run."""
    mailer: Mailer | None = getattr(request.app.state, "mailer", None)
    if mailer is None:
        mailer = build_mailer(settings)
        request.app.state.mailer = mailer
    return mailer


def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Identity:
    """Resolve the caller from the bearer token, falling back to the ``jwt`` cookie.

    Raises:
        HTTPException: 401 when no token is presented, 403 when it does not verify.
    """
    token = credentials.credentials if credentials is not None else None
    if not token:
        token = request.cookies.get(settings.refresh_cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = security.decode_access_token(token)
    identity = Identity.from_claims(claims) if claims is not None else None
    if identity is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return identity


SettingsDep = Annotated[Settings, Depends(get_settings)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]
SessionFactoryDep = Annotated[SessionFactory, Depends(get_session_factory)]
CurrentUserDep = Annotated[Identity, Depends(get_current_identity)]


def get_post_service(db: SessionDep) -> PostService:
    return PostService(db)


def get_like_ledger(db: SessionDep) -> LikeLedger:
    return LikeLedger(db)


def get_notification_dispatcher(db: SessionDep) -> NotificationDispatcher:
    return NotificationDispatcher(db)


def get_user_service(db: SessionDep) -> UserService:
    return UserService(db)


def get_auth_service(db: SessionDep, app_settings: SettingsDep, mailer: MailerDep) -> AuthService:
    return AuthService(db, app_settings, mailer)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
LikeLedgerDep = Annotated[LikeLedger, Depends(get_like_ledger)]
DispatcherDep = Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
