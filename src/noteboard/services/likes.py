"""Like ledger: one toggleable like per user and target."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from noteboard.core.errors import Forbidden, NotFound, ValidationError
from noteboard.core.security import Identity
from noteboard.models import Like, LikeTargetType, Post, Reply, User
from noteboard.repositories import Collection
from noteboard.schemas.post import LikedPostResponse
from noteboard.schemas.reply import LikedReplyResponse
from noteboard.services.notifications import (
    NotificationDispatcher,
    post_like_notice,
    reply_like_notice,
)
from noteboard.services.views import to_liked_post_response, to_liked_reply_response

logger = logging.getLogger(__name__)

__all__ = ["LikeLedger", "ToggleResult", "parse_target_type"]


@dataclass(frozen=True)
class ToggleResult:
    """Caller's like state after a toggle and the recomputed count."""

    liked: bool
    count: int


def parse_target_type(target_type: str) -> LikeTargetType:
    """Return the target type enum or raise ``ValidationError``."""
    try:
        return LikeTargetType(target_type)
    except ValueError as err:
        raise ValidationError("target_id and a valid target_type ('post' or 'reply') are required") from err


class LikeLedger:
    """Service tracking likes on posts and replies."""

    def __init__(self, db: Session, dispatcher: NotificationDispatcher | None = None) -> None:
        self.db = db
        self.likes = Collection(db, Like)
        self.posts = Collection(db, Post)
        self.replies = Collection(db, Reply)
        self.dispatcher = dispatcher or NotificationDispatcher(db)

    def toggle(self, actor: Identity, target_id: int, target_type: str) -> ToggleResult:
        """Like the target if the actor has not, otherwise remove the like.

        A new like on someone else's post or reply notifies its owner. The count
        is always recounted from the store after the change.

        Raises:
            ValidationError: If ``target_type`` is not recognised.
            NotFound: If the target does not exist.
        """
        kind = parse_target_type(target_type)
        post, reply = self._load_target(kind, target_id)

        existing = self.likes.find_one(user_id=actor.id, target_id=target_id, target_type=kind.value)
        if existing is not None:
            self.likes.delete(existing)
            self.db.commit()
            liked = False
        else:
            try:
                self.likes.insert(user_id=actor.id, target_id=target_id, target_type=kind.value)
            except IntegrityError:
                # A concurrent toggle inserted the same like first.
                self.db.rollback()
                logger.info(
                    "Duplicate like by user %s on %s %s ignored", actor.id, kind.value, target_id
                )
            else:
                self._notify_owner(actor, kind, post, reply)
                self.db.commit()
            liked = True

        return ToggleResult(liked=liked, count=self.get_count(target_id, kind.value))

    def _load_target(self, kind: LikeTargetType, target_id: int) -> tuple[Post | None, Reply | None]:
        if kind is LikeTargetType.POST:
            post = self.posts.get(target_id)
            if post is None:
                raise NotFound("Post not found")
            return post, None
        reply = self.replies.get(target_id)
        if reply is None:
            raise NotFound("Reply not found")
        return self.posts.get(reply.post_id), reply

    def _notify_owner(
        self,
        actor: Identity,
        kind: LikeTargetType,
        post: Post | None,
        reply: Reply | None,
    ) -> None:
        if kind is LikeTargetType.POST and post is not None:
            if post.owner_id != actor.id:
                self.dispatcher.notify(post.owner_id, post_like_notice(post, actor.username), actor.username)
        elif reply is not None and reply.author_id != actor.id:
            self.dispatcher.notify(
                reply.author_id, reply_like_notice(reply, post, actor.username), actor.username
            )

    def get_count(self, target_id: int, target_type: str) -> int:
        """Return the current number of likes on a target."""
        kind = parse_target_type(target_type)
        return self.likes.count(target_id=target_id, target_type=kind.value)

    def get_user_like_status(self, user_id: int, target_id: int, target_type: str) -> bool:
        """Return True if ``user_id`` currently likes the target."""
        kind = parse_target_type(target_type)
        return self.likes.exists(user_id=user_id, target_id=target_id, target_type=kind.value)

    def _likes_of(self, user_id: int, actor: Identity, kind: LikeTargetType) -> list[Like]:
        if user_id != actor.id:
            raise Forbidden("Forbidden")
        return self.likes.find(
            desc(Like.created_at),
            desc(Like.id),
            user_id=user_id,
            target_type=kind.value,
        )

    def liked_posts(self, user_id: int, actor: Identity) -> list[LikedPostResponse]:
        """Return the posts a user liked, most recently liked first."""
        likes = self._likes_of(user_id, actor, LikeTargetType.POST)
        posts = {post.id: post for post in self.posts.find(id=[like.target_id for like in likes])}
        usernames = Collection(self.db, User).values_by_id(
            (post.owner_id for post in posts.values()), "username"
        )
        return [
            to_liked_post_response(post, usernames.get(post.owner_id), like.created_at)
            for like in likes
            if (post := posts.get(like.target_id)) is not None
        ]

    def liked_replies(self, user_id: int, actor: Identity) -> list[LikedReplyResponse]:
        """Return the replies a user liked with author and post title attached."""
        likes = self._likes_of(user_id, actor, LikeTargetType.REPLY)
        replies = {reply.id: reply for reply in self.replies.find(id=[like.target_id for like in likes])}
        usernames = Collection(self.db, User).values_by_id(
            (reply.author_id for reply in replies.values()), "username"
        )
        titles = self.posts.values_by_id((reply.post_id for reply in replies.values()), "title")
        return [
            to_liked_reply_response(
                reply,
                usernames.get(reply.author_id),
                titles.get(reply.post_id, ""),
                like.created_at,
            )
            for like in likes
            if (reply := replies.get(like.target_id)) is not None
        ]

    # Cascade helpers; they flush but leave committing to the caller.

    def purge_for_targets(self, target_type: LikeTargetType, target_ids: Iterable[int]) -> int:
        """Delete every like on the given posts or replies."""
        return self.likes.delete_many(target_id=list(target_ids), target_type=target_type.value)

    def purge_by_user(self, user_id: int) -> int:
        """Delete every like placed by a user."""
        return self.likes.delete_many(user_id=user_id)
