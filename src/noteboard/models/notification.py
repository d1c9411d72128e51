# src/noteboard/models/notification.py
"""SQLAlchemy model for user notifications."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteboard.db.session import Base
from noteboard.db.time import utcnow


class NotificationType(str, Enum):
    """Events a notification can describe."""

    REPLY = "reply"
    TAG = "tag"
    LIKE_POST = "like-post"
    LIKE_REPLY = "like-reply"


class Notification(Base):
    """Record telling one user about another user's action.

    The row is flat; which optional columns are filled depends on ``type``.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notification_recipient_created", "recipient_user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipient_user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    actor_username: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    post_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    post_title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    reply_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    reply_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
