# src/noteboard/models/user.py
"""SQLAlchemy model for user accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteboard.db.session import Base
from noteboard.db.time import utcnow

DEFAULT_ROLES = ["Member"]
MANAGEMENT_ROLES = frozenset({"Admin", "Manager"})


class User(Base):
    """Account that owns posts, replies and likes.

    Username and email are unique case-insensitively; the check lives in the
    service layer so it behaves the same on every database backend.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    roles: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=lambda: list(DEFAULT_ROLES)
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    reset_token: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    reset_token_expiry: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    @property
    def is_manager(self) -> bool:
        """Return True if the user may manage other accounts."""
        return bool(MANAGEMENT_ROLES.intersection(self.roles or []))
