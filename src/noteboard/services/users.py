"""CRUD-style helpers for managing users."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from noteboard.core import security
from noteboard.core.errors import Conflict, Forbidden, NotFound, ValidationError
from noteboard.core.security import Identity
from noteboard.models import User
from noteboard.models.user import DEFAULT_ROLES, MANAGEMENT_ROLES
from noteboard.repositories import Collection
from noteboard.schemas.user import UserCreate, UserUpdate
from noteboard.services.notifications import NotificationDispatcher
from noteboard.services.posts import PostService

logger = logging.getLogger(__name__)

__all__ = ["UserService"]


class UserService:
    """Service for registering, updating and deleting accounts."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.users = Collection(db, User)

    def list_users(self) -> Sequence[User]:
        """Return every account."""
        return self.users.find(User.id)

    def get_user(self, user_id: int) -> User:
        """Return a user by primary key or raise ``NotFound``."""
        user = self.users.get(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def create_user(self, data: UserCreate) -> User:
        """Register a new account.

        Raises:
            Conflict: If the username or email is taken, ignoring case.
        """
        if self.users.find_one_ci("username", data.username) is not None:
            raise Conflict("Duplicate username")
        if self.users.find_one_ci("email", str(data.email)) is not None:
            raise Conflict("Duplicate email")

        user = self.users.insert(
            username=data.username,
            email=str(data.email),
            password_hash=security.hash_password(data.password),
            roles=list(DEFAULT_ROLES),
            active=True,
        )
        self.db.commit()
        self.db.refresh(user)
        logger.info("Registered user %s (%s)", user.id, user.username)
        return user

    @staticmethod
    def _is_manager(actor: Identity) -> bool:
        return bool(MANAGEMENT_ROLES.intersection(actor.roles))

    def update_user(self, data: UserUpdate, actor: Identity) -> User:
        """Apply an update to an existing account.

        Callers may update their own username and password. Changing roles or
        the active flag, or touching another account, requires a management role.

        Raises:
            Forbidden: If the caller may not make this change.
            NotFound: If the user does not exist.
            Conflict: If another account already has the username.
            ValidationError: If the new password equals the current one.
        """
        is_manager = self._is_manager(actor)
        if data.id != actor.id and not is_manager:
            raise Forbidden("Not authorized to update this user")
        user = self.get_user(data.id)
        if not is_manager and (list(data.roles) != list(user.roles) or data.active != user.active):
            raise Forbidden("Only managers can change roles or account status")
        if self.users.find_one_ci("username", data.username, exclude_id=user.id) is not None:
            raise Conflict("Duplicate username")

        if data.password:
            if security.verify_password(data.password, user.password_hash):
                raise ValidationError("New password must be different from the current password.")
            user.password_hash = security.hash_password(data.password)

        if data.username != user.username:
            renamed = NotificationDispatcher(self.db).rename_actor(user.username, data.username)
            logger.info("Renamed user %s; rewrote %d notifications", user.id, renamed)
        user.username = data.username
        user.roles = list(data.roles)
        user.active = data.active
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: int, actor: Identity) -> str:
        """Delete an account and everything that depends on it.

        Callers may delete themselves; deleting someone else requires a
        management role.

        Returns:
            Username of the deleted account.
        """
        if user_id != actor.id and not self._is_manager(actor):
            raise Forbidden("Not authorized to delete this user")
        user = self.get_user(user_id)
        username = user.username

        PostService(self.db).purge_user_content(user)
        self.users.delete(user)
        self.db.commit()
        logger.info("Deleted user %s (%s) and all related data", user_id, username)
        return username
