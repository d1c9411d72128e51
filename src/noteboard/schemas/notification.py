# src/noteboard/schemas/notification.py
"""Notification payloads and API schemas.

Each payload variant carries only the fields its event needs; the ``type``
field selects the variant.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class ReplyNotice(BaseModel):
    """Someone replied on a post the recipient owns."""

    type: Literal["reply"] = "reply"
    post_id: int
    post_title: str | None = None
    reply_id: int | None = None
    reply_text: str


class TagNotice(BaseModel):
    """Someone mentioned the recipient in a reply."""

    type: Literal["tag"] = "tag"
    post_id: int
    post_title: str | None = None
    reply_id: int
    reply_text: str
    message: str


class PostLikeNotice(BaseModel):
    """Someone liked a post the recipient owns."""

    type: Literal["like-post"] = "like-post"
    post_id: int
    post_title: str
    message: str


class ReplyLikeNotice(BaseModel):
    """Someone liked a reply the recipient wrote."""

    type: Literal["like-reply"] = "like-reply"
    post_id: int
    post_title: str = ""
    reply_id: int
    reply_text: str
    message: str


NotificationPayload = Annotated[
    ReplyNotice | TagNotice | PostLikeNotice | ReplyLikeNotice,
    Field(discriminator="type"),
]


class NotificationCreate(BaseModel):
    """Schema for the generic notification endpoint."""

    recipient_user_id: int
    post_id: int
    reply_text: str = Field(..., min_length=1)
    reply_id: int | None = None


class NotificationReadUpdate(BaseModel):
    """Schema for flipping the read flag of one notification."""

    read: StrictBool


class NotificationResponse(BaseModel):
    """Schema for notification information returned by the API."""

    id: int
    recipient_user_id: int
    type: str
    actor_username: str
    post_id: int | None = None
    post_title: str | None = None
    reply_id: int | None = None
    reply_text: str | None = None
    message: str | None = None
    read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MarkAllReadResponse(BaseModel):
    """Outcome of marking every unread notification as read."""

    message: str
    modified_count: int
