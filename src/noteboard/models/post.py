# src/noteboard/models/post.py
"""SQLAlchemy model for posts (forum threads and notes)."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteboard.db.session import Base
from noteboard.db.time import utcnow

FIRST_TICKET = 500


class PostKind(str, Enum):
    """Surfaces a post can be published on."""

    FORUM = "forum"
    NOTE = "note"


class Post(Base):
    """Top-level item that receives replies and likes.

    Replies, likes and notifications that point at a post are removed by the
    service layer when the post is deleted; nothing here cascades on its own.
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kind: Mapped[str] = mapped_column(
        String(10), nullable=False, default=PostKind.FORUM.value, index=True
    )
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Username of whoever last edited the post; null until the first update.
    edited_by: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)
    # Human-facing sequence number, starting at FIRST_TICKET.
    ticket: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
