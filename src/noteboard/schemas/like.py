# src/noteboard/schemas/like.py
"""Like-related Pydantic schemas."""

from pydantic import BaseModel, Field


class LikeToggle(BaseModel):
    """Schema for toggling a like on a post or reply."""

    target_id: int
    target_type: str = Field(..., description="'post' or 'reply'")


class LikeToggleResponse(BaseModel):
    """Outcome of a toggle: the caller's new state and the recomputed count."""

    liked: bool
    count: int


class LikeCountResponse(BaseModel):
    """Current number of likes on a target."""

    count: int


class LikeStatusResponse(BaseModel):
    """Whether the caller currently likes a target."""

    liked: bool
