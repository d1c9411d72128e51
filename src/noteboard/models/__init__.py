# src/noteboard/models/__init__.py
"""SQLAlchemy models for the Noteboard application."""

from .like import Like, LikeTargetType
from .notification import Notification, NotificationType
from .post import Post, PostKind
from .reply import Reply
from .user import User

__all__ = [
    "Like", "LikeTargetType",
    "Notification", "NotificationType",
    "Post", "PostKind",
    "Reply",
    "User",
]
