"""Post and reply lifecycle, cascades and reply notification fan-out.

Posts, replies, likes and notifications reference each other by id only, so
every delete in this module removes the dependent rows itself before removing
the parent.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from noteboard.core.errors import Conflict, Forbidden, NotFound, ValidationError
from noteboard.core.security import Identity
from noteboard.models import LikeTargetType, Post, PostKind, Reply, User
from noteboard.models.post import FIRST_TICKET
from noteboard.repositories import Collection
from noteboard.schemas.notification import NotificationPayload
from noteboard.schemas.post import PostResponse
from noteboard.schemas.reply import ReplyResponse, UserReplyResponse
from noteboard.services.likes import LikeLedger
from noteboard.services.mentions import extract_mentions
from noteboard.services.notifications import NotificationDispatcher, reply_notice, tag_notice
from noteboard.services.views import (
    to_post_response,
    to_reply_response,
    to_user_reply_response,
)

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]

__all__ = ["PostService", "SessionFactory", "run_reply_fan_out"]


class PostService:
    """Service coordinating posts and replies with their likes and notifications."""

    def __init__(
        self,
        db: Session,
        dispatcher: NotificationDispatcher | None = None,
        ledger: LikeLedger | None = None,
    ) -> None:
        self.db = db
        self.dispatcher = dispatcher or NotificationDispatcher(db)
        self.ledger = ledger or LikeLedger(db, self.dispatcher)
        self.posts = Collection(db, Post)
        self.replies = Collection(db, Reply)
        self.users = Collection(db, User)

    # Posts

    def get_post(self, post_id: int, kind: PostKind | None = None) -> Post:
        """Return a post, optionally restricted to one kind.

        Raises:
            NotFound: If no such post exists.
        """
        post = self.posts.get(post_id)
        if post is None or (kind is not None and post.kind != kind.value):
            label = kind.value.capitalize() if kind is not None else "Post"
            raise NotFound(f"{label} not found")
        return post

    def list_posts(self, kind: PostKind) -> list[PostResponse]:
        """Return every post of ``kind`` with its owner's username attached."""
        posts = self.posts.find(Post.created_at, Post.id, kind=kind.value)
        usernames = self.users.values_by_id((post.owner_id for post in posts), "username")
        return [to_post_response(post, usernames.get(post.owner_id)) for post in posts]

    def _ensure_title_free(self, title: str, kind: PostKind, exclude_id: int | None = None) -> None:
        if self.posts.find_one_ci("title", title, exclude_id=exclude_id, kind=kind.value) is not None:
            raise Conflict(f"Duplicate {kind.value} title")

    def _next_ticket(self) -> int:
        current = self.db.execute(select(func.max(Post.ticket))).scalar()
        return FIRST_TICKET if current is None else int(current) + 1

    def create_post(self, kind: PostKind, owner: Identity, title: str, text: str) -> Post:
        """Create a post owned by the caller.

        Raises:
            ValidationError: If the title or text is blank.
            Conflict: If another post already uses the title, ignoring case.
        """
        if not title.strip() or not text.strip():
            raise ValidationError("All fields are required")
        self._ensure_title_free(title, kind)
        post = self.posts.insert(
            kind=kind.value,
            owner_id=owner.id,
            title=title,
            text=text,
            completed=False,
            edited_by=None,
            ticket=self._next_ticket(),
        )
        self.db.commit()
        self.db.refresh(post)
        logger.info("User %s created %s %s (ticket %s)", owner.id, kind.value, post.id, post.ticket)
        return post

    def update_post(
        self,
        post_id: int,
        actor: Identity,
        *,
        kind: PostKind,
        owner_id: int,
        title: str,
        text: str,
        completed: bool,
    ) -> Post:
        """Overwrite a post and record the acting user as its editor.

        Raises:
            NotFound: If the post or the new owner does not exist.
            Conflict: If a different post already uses the title.
        """
        post = self.get_post(post_id, kind)
        if self.users.get(owner_id) is None:
            raise NotFound("Owner not found")
        self._ensure_title_free(title, kind, exclude_id=post.id)

        post.owner_id = owner_id
        post.title = title
        post.text = text
        post.completed = completed
        post.edited_by = actor.username
        self.db.commit()
        self.db.refresh(post)
        return post

    def _purge_post(self, post: Post) -> None:
        # Reply ids must be collected before the replies are gone.
        reply_ids = self.replies.find_ids(post_id=post.id)
        self.replies.delete_many(post_id=post.id)
        self.dispatcher.purge_for_posts([post.id])
        self.ledger.purge_for_targets(LikeTargetType.POST, [post.id])
        self.ledger.purge_for_targets(LikeTargetType.REPLY, reply_ids)
        self.posts.delete(post)
        logger.info(
            "Deleted %s %s with %d replies and their likes and notifications",
            post.kind,
            post.id,
            len(reply_ids),
        )

    def delete_post(self, post_id: int, kind: PostKind | None = None) -> str:
        """Delete a post together with its replies, likes and notifications.

        Returns:
            Title of the deleted post.
        """
        post = self.get_post(post_id, kind)
        title = post.title
        self._purge_post(post)
        self.db.commit()
        return title

    # Replies

    def list_replies(self, post_id: int, kind: PostKind | None = None) -> list[ReplyResponse]:
        """Return the replies of a post with each author's current username."""
        self.get_post(post_id, kind)
        replies = self.replies.find(Reply.created_at, Reply.id, post_id=post_id)
        usernames = self.users.values_by_id((reply.author_id for reply in replies), "username")
        return [to_reply_response(reply, usernames.get(reply.author_id)) for reply in replies]

    def replies_by_user(self, user_id: int, actor: Identity) -> list[UserReplyResponse]:
        """Return every reply written by ``user_id``; callers may only list their own."""
        if user_id != actor.id:
            raise Forbidden("Forbidden")
        replies = self.replies.find(Reply.created_at, Reply.id, author_id=user_id)
        titles = self.posts.values_by_id((reply.post_id for reply in replies), "title")
        return [
            to_user_reply_response(reply, actor.username, titles.get(reply.post_id, ""))
            for reply in replies
        ]

    def add_reply(self, post_id: int, author: Identity, text: str, kind: PostKind | None = None) -> Reply:
        """Store a reply. Notifications are sent separately by ``fan_out_reply``.

        Raises:
            ValidationError: If the text is blank.
            NotFound: If the post does not exist.
        """
        if not text.strip():
            raise ValidationError("Reply is required")
        self.get_post(post_id, kind)
        reply = self.replies.insert(post_id=post_id, author_id=author.id, text=text)
        self.db.commit()
        self.db.refresh(reply)
        return reply

    def fan_out_reply(self, reply_id: int, author: Identity) -> int:
        """Notify the post owner and every tagged user about a new reply.

        The owner gets a ``reply`` notification unless they wrote the reply or are
        tagged in it; a tagged owner is covered by the tag notification instead.
        Each tagged user other than the author gets one ``tag`` notification.
        A failure for one recipient is logged and does not stop the others.

        Returns:
            Number of notifications created.
        """
        reply = self.replies.get(reply_id)
        if reply is None:
            logger.warning("Reply %s vanished before notifications were sent", reply_id)
            return 0
        post = self.posts.get(reply.post_id)
        if post is None:
            logger.warning("Post %s vanished before notifications were sent", reply.post_id)
            return 0

        tagged = extract_mentions(reply.text)
        owner = self.users.get(post.owner_id)
        created = 0

        if owner is not None and owner.id != author.id and owner.username not in tagged:
            created += self._deliver(post.owner_id, reply_notice(post, reply), author, "reply")

        for username in sorted(tagged):
            if username == author.username:
                continue
            try:
                tagged_user = self.users.find_one(username=username)
            except SQLAlchemyError:
                logger.exception("Lookup of tagged user %r failed", username)
                self.db.rollback()
                continue
            if tagged_user is None or tagged_user.id == author.id:
                continue
            created += self._deliver(
                tagged_user.id, tag_notice(post, reply, author.username), author, "tag"
            )
        return created

    def _deliver(
        self,
        recipient_id: int,
        payload: NotificationPayload,
        author: Identity,
        label: str,
    ) -> int:
        try:
            self.dispatcher.notify(recipient_id, payload, author.username)
            self.db.commit()
        except SQLAlchemyError:
            logger.exception("Failed to store %s notification for user %s", label, recipient_id)
            self.db.rollback()
            return 0
        return 1

    def _get_reply(self, reply_id: int) -> Reply:
        reply = self.replies.get(reply_id)
        if reply is None:
            raise NotFound("Reply not found")
        return reply

    def _purge_reply(self, reply: Reply) -> None:
        self.ledger.purge_for_targets(LikeTargetType.REPLY, [reply.id])
        self.dispatcher.purge_for_replies([reply.id])
        self.replies.delete(reply)

    def delete_reply(self, reply_id: int) -> None:
        """Delete a reply together with its likes and notifications."""
        reply = self._get_reply(reply_id)
        self._purge_reply(reply)
        self.db.commit()

    def edit_reply(self, reply_id: int, actor: Identity, text: str) -> Reply:
        """Replace the text of a reply written by ``actor``.

        Raises:
            ValidationError: If the new text is blank.
            NotFound: If the reply does not exist.
            Forbidden: If the caller is not the reply's author.
        """
        if not text.strip():
            raise ValidationError("Reply ID and new text are required")
        reply = self._get_reply(reply_id)
        if reply.author_id != actor.id:
            raise Forbidden("Not authorized to edit this reply")
        reply.text = text
        self.db.commit()
        self.db.refresh(reply)
        return reply

    # Users

    def purge_user_content(self, user: User) -> None:
        """Remove everything a user owns or caused, without committing.

        Owned posts go through the full post cascade, the user's replies on other
        posts through the reply cascade, then the user's own likes and every
        notification addressed to or caused by them.
        """
        for post in self.posts.find(owner_id=user.id):
            self._purge_post(post)
        for reply in self.replies.find(author_id=user.id):
            self._purge_reply(reply)
        self.ledger.purge_by_user(user.id)
        self.dispatcher.purge_for_user(user.id, user.username)


def run_reply_fan_out(session_factory: SessionFactory, reply_id: int, author: Identity) -> None:
    """Send reply notifications on a fresh session, isolating every failure.

    Runs after the response for the reply has been sent, so nothing raised here
    can reach the caller or undo the stored reply.
    """
    try:
        with session_factory() as session:
            created = PostService(session).fan_out_reply(reply_id, author)
            logger.debug("Reply %s produced %d notifications", reply_id, created)
    except Exception:
        logger.exception("Notification fan-out for reply %s failed", reply_id)
