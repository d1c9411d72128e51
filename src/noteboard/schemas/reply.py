# src/noteboard/schemas/reply.py
"""Reply-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReplyCreate(BaseModel):
    """Schema for adding a reply to a post."""

    reply_text: str = Field(..., min_length=1)


class ReplyUpdate(BaseModel):
    """Schema for editing the text of an existing reply."""

    reply_text: str = Field(..., min_length=1)


class ReplyResponse(BaseModel):
    """Schema for reply information returned by the API."""

    id: int
    post_id: int
    author_id: int
    username: str | None = Field(None, description="Author's current username")
    text: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserReplyResponse(ReplyResponse):
    """A reply listed under its author, with the parent post's title."""

    post_title: str = ""


class LikedReplyResponse(UserReplyResponse):
    """A reply a user has liked, stamped with when the like was placed."""

    liked_at: datetime
