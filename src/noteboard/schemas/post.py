# src/noteboard/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=200)
    text: str = Field(..., min_length=1)


class PostUpdate(BaseModel):
    """Schema for updating a post; ``owner_id`` may reassign ownership."""

    owner_id: int
    title: str = Field(..., min_length=1, max_length=200)
    text: str = Field(..., min_length=1)
    completed: bool = False


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    kind: str
    owner_id: int
    username: str | None = Field(None, description="Owner's current username")
    title: str
    text: str
    completed: bool
    edited_by: str | None
    ticket: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LikedPostResponse(PostResponse):
    """A post a user has liked, stamped with when the like was placed."""

    liked_at: datetime
