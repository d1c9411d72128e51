# src/noteboard/api/v1/endpoints/notifications.py
"""Notification endpoints for the Noteboard API."""

from __future__ import annotations

from fastapi import APIRouter, status

from noteboard.api.v1.dependencies import CurrentUserDep, DispatcherDep, PostServiceDep
from noteboard.schemas.common import Message
from noteboard.schemas.notification import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationReadUpdate,
    NotificationResponse,
    ReplyNotice,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    current_user: CurrentUserDep,
    notifications: DispatcherDep,
) -> list[NotificationResponse]:
    """The caller's notifications, newest first."""
    return [
        NotificationResponse.model_validate(item)
        for item in notifications.list_for(current_user.id)
    ]


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: NotificationCreate,
    current_user: CurrentUserDep,
    notifications: DispatcherDep,
    posts: PostServiceDep,
) -> NotificationResponse:
    """Notify another user about a reply; the caller is always recorded as the actor."""
    post = posts.get_post(payload.post_id)
    notice = ReplyNotice(
        post_id=post.id,
        post_title=post.title,
        reply_id=payload.reply_id,
        reply_text=payload.reply_text,
    )
    notification = notifications.create(payload.recipient_user_id, notice, current_user)
    return NotificationResponse.model_validate(notification)


@router.patch("/mark-all-read", response_model=MarkAllReadResponse)
async def mark_all_read(current_user: CurrentUserDep, notifications: DispatcherDep) -> MarkAllReadResponse:
    """Mark every unread notification of the caller as read."""
    modified = notifications.mark_all_read(current_user.id)
    return MarkAllReadResponse(message="All notifications marked as read", modified_count=modified)


@router.patch("/{notification_id}", response_model=NotificationResponse)
async def update_read_state(
    notification_id: int,
    payload: NotificationReadUpdate,
    current_user: CurrentUserDep,
    notifications: DispatcherDep,
) -> NotificationResponse:
    """Set the read flag of one of the caller's notifications."""
    notification = notifications.mark_read(notification_id, payload.read, current_user.id)
    return NotificationResponse.model_validate(notification)


@router.delete("/{notification_id}", response_model=Message)
async def delete_notification(
    notification_id: int,
    current_user: CurrentUserDep,
    notifications: DispatcherDep,
) -> Message:
    """Delete one of the caller's notifications."""
    notifications.delete(notification_id, current_user.id)
    return Message(message=f"Notification with ID {notification_id} deleted")
