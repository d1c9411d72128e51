# src/noteboard/models/like.py
"""Models capturing like interactions on posts and replies."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from noteboard.db.session import Base
from noteboard.db.time import utcnow


class LikeTargetType(str, Enum):
    """Entities that can be liked."""

    POST = "post"
    REPLY = "reply"


class Like(Base):
    """Per-user like on a post or a reply.

    ``target_id`` is polymorphic over ``target_type`` so it carries no foreign key.
    """

    __tablename__ = "likes"
    __table_args__ = (
        # One like per user and target; duplicate inserts from racing toggles fail here.
        UniqueConstraint("user_id", "target_id", "target_type", name="uq_like_user_target"),
        CheckConstraint("target_type IN ('post', 'reply')", name="ck_like_target_type"),
        Index("ix_like_target", "target_id", "target_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    target_type: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
