"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import ForgotPasswordRequest, LoginRequest, ResetPasswordRequest, TokenResponse
from .common import Message
from .like import LikeCountResponse, LikeStatusResponse, LikeToggle, LikeToggleResponse
from .notification import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationPayload,
    NotificationReadUpdate,
    NotificationResponse,
    PostLikeNotice,
    ReplyLikeNotice,
    ReplyNotice,
    TagNotice,
)
from .post import LikedPostResponse, PostCreate, PostResponse, PostUpdate
from .reply import (
    LikedReplyResponse,
    ReplyCreate,
    ReplyResponse,
    ReplyUpdate,
    UserReplyResponse,
)
from .user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "ForgotPasswordRequest", "LoginRequest", "ResetPasswordRequest", "TokenResponse",
    "Message",
    "LikeCountResponse", "LikeStatusResponse", "LikeToggle", "LikeToggleResponse",
    "MarkAllReadResponse", "NotificationCreate", "NotificationPayload",
    "NotificationReadUpdate", "NotificationResponse",
    "PostLikeNotice", "ReplyLikeNotice", "ReplyNotice", "TagNotice",
    "LikedPostResponse", "PostCreate", "PostResponse", "PostUpdate",
    "LikedReplyResponse", "ReplyCreate", "ReplyResponse", "ReplyUpdate", "UserReplyResponse",
    "UserCreate", "UserResponse", "UserUpdate",
]
