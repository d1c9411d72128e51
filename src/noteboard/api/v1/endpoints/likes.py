# src/noteboard/api/v1/endpoints/likes.py
"""Like endpoints for the Noteboard API."""

from __future__ import annotations

from fastapi import APIRouter, Query

from noteboard.api.v1.dependencies import CurrentUserDep, LikeLedgerDep
from noteboard.schemas.like import (
    LikeCountResponse,
    LikeStatusResponse,
    LikeToggle,
    LikeToggleResponse,
)

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("", response_model=LikeToggleResponse)
async def toggle_like(
    payload: LikeToggle,
    current_user: CurrentUserDep,
    likes: LikeLedgerDep,
) -> LikeToggleResponse:
    """Like a post or reply, or remove the caller's existing like."""
    result = likes.toggle(current_user, payload.target_id, payload.target_type)
    return LikeToggleResponse(liked=result.liked, count=result.count)


@router.get("/count", response_model=LikeCountResponse)
async def like_count(
    current_user: CurrentUserDep,
    likes: LikeLedgerDep,
    target_id: int = Query(...),
    target_type: str = Query(...),
) -> LikeCountResponse:
    """Number of likes on a post or reply."""
    return LikeCountResponse(count=likes.get_count(target_id, target_type))


@router.get("/user", response_model=LikeStatusResponse)
async def user_like_status(
    current_user: CurrentUserDep,
    likes: LikeLedgerDep,
    target_id: int = Query(...),
    target_type: str = Query(...),
) -> LikeStatusResponse:
    """Whether the caller currently likes a post or reply."""
    return LikeStatusResponse(liked=likes.get_user_like_status(current_user.id, target_id, target_type))
