"""Conversions from ORM rows to API schemas with populated references."""
from __future__ import annotations

from typing import Any

from noteboard.models import Post, Reply
from noteboard.schemas.post import LikedPostResponse, PostResponse
from noteboard.schemas.reply import LikedReplyResponse, ReplyResponse, UserReplyResponse


def _post_fields(post: Post) -> dict[str, Any]:
    return {
        "id": post.id,
        "kind": post.kind,
        "owner_id": post.owner_id,
        "title": post.title,
        "text": post.text,
        "completed": post.completed,
        "edited_by": post.edited_by,
        "ticket": post.ticket,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def _reply_fields(reply: Reply) -> dict[str, Any]:
    return {
        "id": reply.id,
        "post_id": reply.post_id,
        "author_id": reply.author_id,
        "text": reply.text,
        "created_at": reply.created_at,
        "updated_at": reply.updated_at,
    }


def to_post_response(post: Post, username: str | None) -> PostResponse:
    """Convert a Post ORM instance to an API schema carrying the owner's username."""
    return PostResponse(**_post_fields(post), username=username)


def to_liked_post_response(post: Post, username: str | None, liked_at: Any) -> LikedPostResponse:
    """Convert a liked Post to an API schema stamped with the like time."""
    return LikedPostResponse(**_post_fields(post), username=username, liked_at=liked_at)


def to_reply_response(reply: Reply, username: str | None) -> ReplyResponse:
    """Convert a Reply ORM instance to an API schema carrying the author's username."""
    return ReplyResponse(**_reply_fields(reply), username=username)


def to_user_reply_response(reply: Reply, username: str | None, post_title: str) -> UserReplyResponse:
    """Convert a Reply to the per-author listing schema."""
    return UserReplyResponse(**_reply_fields(reply), username=username, post_title=post_title)


def to_liked_reply_response(
    reply: Reply,
    username: str | None,
    post_title: str,
    liked_at: Any,
) -> LikedReplyResponse:
    """Convert a liked Reply to an API schema stamped with the like time."""
    return LikedReplyResponse(
        **_reply_fields(reply),
        username=username,
        post_title=post_title,
        liked_at=liked_at,
    )
