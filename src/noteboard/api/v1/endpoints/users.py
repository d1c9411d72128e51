# src/noteboard/api/v1/endpoints/users.py
"""User management endpoints for the Noteboard API."""

from __future__ import annotations

from fastapi import APIRouter, status

from noteboard.api.v1.dependencies import CurrentUserDep, LikeLedgerDep, UserServiceDep
from noteboard.schemas.common import Message
from noteboard.schemas.post import LikedPostResponse
from noteboard.schemas.reply import LikedReplyResponse
from noteboard.schemas.user import UserCreate, UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(payload: UserCreate, users: UserServiceDep) -> UserResponse:
    """Register a new account; open to anonymous callers."""
    user = users.create_user(payload)
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
async def list_users(current_user: CurrentUserDep, users: UserServiceDep) -> list[UserResponse]:
    """List every account."""
    return [UserResponse.model_validate(user) for user in users.list_users()]


@router.patch("", response_model=UserResponse)
async def update_user(
    payload: UserUpdate,
    current_user: CurrentUserDep,
    users: UserServiceDep,
) -> UserResponse:
    """Update an account; roles and the active flag are reserved for managers."""
    user = users.update_user(payload, current_user)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=Message)
async def delete_user(user_id: int, current_user: CurrentUserDep, users: UserServiceDep) -> Message:
    """Delete an account with its posts, replies, likes and notifications."""
    username = users.delete_user(user_id, current_user)
    return Message(message=f"Username {username} with ID {user_id} deleted")


@router.get("/{user_id}/liked-forums", response_model=list[LikedPostResponse])
async def liked_forums(
    user_id: int,
    current_user: CurrentUserDep,
    likes: LikeLedgerDep,
) -> list[LikedPostResponse]:
    """Posts the caller has liked, most recently liked first."""
    return likes.liked_posts(user_id, current_user)


@router.get("/{user_id}/liked-replies", response_model=list[LikedReplyResponse])
async def liked_replies(
    user_id: int,
    current_user: CurrentUserDep,
    likes: LikeLedgerDep,
) -> list[LikedReplyResponse]:
    """Replies the caller has liked, most recently liked first."""
    return likes.liked_replies(user_id, current_user)
