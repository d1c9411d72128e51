"""Notification creation, listing and read-state management."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import desc
from sqlalchemy.orm import Session

from noteboard.core.errors import Forbidden, NotFound
from noteboard.core.security import Identity
from noteboard.models import Notification, Post, Reply
from noteboard.repositories import Collection
from noteboard.schemas.notification import (
    NotificationPayload,
    PostLikeNotice,
    ReplyLikeNotice,
    ReplyNotice,
    TagNotice,
)

logger = logging.getLogger(__name__)

__all__ = [
    "NotificationDispatcher",
    "reply_notice",
    "tag_notice",
    "post_like_notice",
    "reply_like_notice",
]


def reply_notice(post: Post, reply: Reply) -> ReplyNotice:
    """Payload for a post owner whose post received a reply."""
    return ReplyNotice(
        post_id=post.id,
        post_title=post.title,
        reply_id=reply.id,
        reply_text=reply.text,
    )


def tag_notice(post: Post, reply: Reply, actor_username: str) -> TagNotice:
    """Payload for a user mentioned in a reply."""
    return TagNotice(
        post_id=post.id,
        post_title=post.title,
        reply_id=reply.id,
        reply_text=reply.text,
        message=f"{actor_username} mentioned you in a reply.",
    )


def post_like_notice(post: Post, actor_username: str) -> PostLikeNotice:
    """Payload for a post owner whose post was liked."""
    return PostLikeNotice(
        post_id=post.id,
        post_title=post.title,
        message=f'{actor_username} liked your {post.kind} "{post.title}"',
    )


def reply_like_notice(reply: Reply, post: Post | None, actor_username: str) -> ReplyLikeNotice:
    """Payload for a reply author whose reply was liked."""
    return ReplyLikeNotice(
        post_id=reply.post_id,
        post_title=post.title if post is not None else "",
        reply_id=reply.id,
        reply_text=reply.text,
        message=f'{actor_username} liked your reply "{reply.text}"',
    )


class NotificationDispatcher:
    """Service persisting and managing notifications.

    ``notify`` is the internal path used by reply fan-out and likes; callers are
    responsible for skipping self-notifications there. ``create`` is the guarded
    path behind the public endpoint.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.notifications = Collection(db, Notification)

    def notify(
        self,
        recipient_id: int,
        payload: NotificationPayload,
        actor_username: str,
    ) -> Notification:
        """Persist one unread notification without committing."""
        values = payload.model_dump()
        notification = self.notifications.insert(
            recipient_user_id=recipient_id,
            actor_username=actor_username,
            read=False,
            **values,
        )
        logger.debug(
            "Queued %s notification %s for user %s",
            payload.type,
            notification.id,
            recipient_id,
        )
        return notification

    def create(
        self,
        recipient_id: int,
        payload: NotificationPayload,
        actor: Identity,
    ) -> Notification:
        """Create a notification on behalf of ``actor``.

        Raises:
            Forbidden: If the actor is the recipient.
        """
        if recipient_id == actor.id:
            raise Forbidden("Cannot create notification for your own action.")
        notification = self.notify(recipient_id, payload, actor.username)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def list_for(self, user_id: int) -> list[Notification]:
        """Return all notifications of a user, newest first."""
        return self.notifications.find(
            desc(Notification.created_at),
            desc(Notification.id),
            recipient_user_id=user_id,
        )

    def _get_owned(self, notification_id: int, user_id: int) -> Notification:
        notification = self.notifications.get(notification_id)
        if notification is None:
            raise NotFound("Notification not found")
        if notification.recipient_user_id != user_id:
            raise Forbidden("Not authorized to modify this notification")
        return notification

    def mark_read(self, notification_id: int, read: bool, user_id: int) -> Notification:
        """Set the read flag of one notification owned by ``user_id``."""
        notification = self._get_owned(notification_id, user_id)
        notification.read = read
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification of a user as read.

        Returns:
            Number of notifications that changed state.
        """
        modified = self.notifications.update_many(
            {"read": True},
            recipient_user_id=user_id,
            read=False,
        )
        self.db.commit()
        return modified

    def delete(self, notification_id: int, requesting_user_id: int) -> None:
        """Delete one notification; only its recipient may do so."""
        notification = self._get_owned(notification_id, requesting_user_id)
        self.notifications.delete(notification)
        self.db.commit()

    # Cascade helpers; they flush but leave committing to the caller.

    def purge_for_posts(self, post_ids: Iterable[int]) -> int:
        """Delete notifications referencing any of ``post_ids``."""
        return self.notifications.delete_many(post_id=list(post_ids))

    def purge_for_replies(self, reply_ids: Iterable[int]) -> int:
        """Delete notifications referencing any of ``reply_ids``."""
        return self.notifications.delete_many(reply_id=list(reply_ids))

    def rename_actor(self, old_username: str, new_username: str) -> int:
        """Point notifications caused by a renamed user at the new username."""
        return self.notifications.update_many(
            {"actor_username": new_username},
            actor_username=old_username,
        )

    def purge_for_user(self, user_id: int, username: str) -> int:
        """Delete notifications addressed to, or caused by, a user."""
        removed = self.notifications.delete_many(recipient_user_id=user_id)
        removed += self.notifications.delete_many(actor_username=username)
        return removed
