"""Business logic services for the Noteboard application."""

from .auth import AuthService
from .likes import LikeLedger
from .mentions import extract_mentions
from .notifications import NotificationDispatcher
from .posts import PostService
from .users import UserService

__all__ = [
    "AuthService",
    "LikeLedger",
    "NotificationDispatcher",
    "PostService",
    "UserService",
    "extract_mentions",
]
