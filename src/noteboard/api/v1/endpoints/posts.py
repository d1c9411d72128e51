# src/noteboard/api/v1/endpoints/posts.py
"""Forum and note endpoints for the Noteboard API.

Forums and notes share one model and one set of routes; ``build_post_router``
mounts those routes once per ``PostKind``.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Query, status

from noteboard.api.v1.dependencies import CurrentUserDep, PostServiceDep, SessionFactoryDep
from noteboard.models import PostKind
from noteboard.schemas.common import Message
from noteboard.schemas.post import PostCreate, PostResponse, PostUpdate
from noteboard.schemas.reply import ReplyCreate, ReplyResponse, ReplyUpdate, UserReplyResponse
from noteboard.services.posts import run_reply_fan_out
from noteboard.services.views import to_post_response, to_reply_response


def build_post_router(kind: PostKind, prefix: str) -> APIRouter:
    """Return a router exposing posts of ``kind`` and their replies under ``prefix``."""
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])
    label = kind.value.capitalize()

    @router.get("", response_model=list[PostResponse])
    async def list_posts(current_user: CurrentUserDep, posts: PostServiceDep) -> list[PostResponse]:
        """List every post of this kind with its owner's username."""
        return posts.list_posts(kind)

    @router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
    async def create_post(
        payload: PostCreate,
        current_user: CurrentUserDep,
        posts: PostServiceDep,
    ) -> PostResponse:
        """Create a post owned by the caller."""
        post = posts.create_post(kind, current_user, payload.title, payload.text)
        return to_post_response(post, current_user.username)

    @router.get("/replies-by-user", response_model=list[UserReplyResponse])
    async def replies_by_user(
        current_user: CurrentUserDep,
        posts: PostServiceDep,
        user_id: int = Query(..., description="Author whose replies to list"),
    ) -> list[UserReplyResponse]:
        """List the caller's own replies with the title of each parent post."""
        return posts.replies_by_user(user_id, current_user)

    @router.patch("/replies/{reply_id}", response_model=ReplyResponse)
    async def edit_reply(
        reply_id: int,
        payload: ReplyUpdate,
        current_user: CurrentUserDep,
        posts: PostServiceDep,
    ) -> ReplyResponse:
        """Replace the text of one of the caller's replies."""
        reply = posts.edit_reply(reply_id, current_user, payload.reply_text)
        return to_reply_response(reply, current_user.username)

    @router.delete("/replies/{reply_id}", response_model=Message)
    async def delete_reply(
        reply_id: int,
        current_user: CurrentUserDep,
        posts: PostServiceDep,
    ) -> Message:
        """Delete a reply together with its likes and notifications."""
        posts.delete_reply(reply_id)
        return Message(message=f"Reply with ID {reply_id} deleted (and associated likes)")

    @router.patch("/{post_id}", response_model=PostResponse)
    async def update_post(
        post_id: int,
        payload: PostUpdate,
        current_user: CurrentUserDep,
        posts: PostServiceDep,
    ) -> PostResponse:
        """Overwrite a post and record the caller as its last editor."""
        post = posts.update_post(
            post_id,
            current_user,
            kind=kind,
            owner_id=payload.owner_id,
            title=payload.title,
            text=payload.text,
            completed=payload.completed,
        )
        owner = posts.users.get(post.owner_id)
        return to_post_response(post, owner.username if owner is not None else None)

    @router.delete("/{post_id}", response_model=Message)
    async def delete_post(post_id: int, current_user: CurrentUserDep, posts: PostServiceDep) -> Message:
        """Delete a post with its replies, likes and notifications."""
        title = posts.delete_post(post_id, kind)
        return Message(message=f"{label} '{title}' with ID {post_id} deleted")

    @router.get("/{post_id}/replies", response_model=list[ReplyResponse])
    async def list_replies(
        post_id: int,
        current_user: CurrentUserDep,
        posts: PostServiceDep,
    ) -> list[ReplyResponse]:
        """List the replies of a post, oldest first."""
        return posts.list_replies(post_id, kind)

    @router.post(
        "/{post_id}/replies",
        response_model=ReplyResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_reply(
        post_id: int,
        payload: ReplyCreate,
        background_tasks: BackgroundTasks,
        current_user: CurrentUserDep,
        posts: PostServiceDep,
        session_factory: SessionFactoryDep,
    ) -> ReplyResponse:
        """Store a reply, then notify the post owner and tagged users after responding."""
        reply = posts.add_reply(post_id, current_user, payload.reply_text, kind)
        background_tasks.add_task(run_reply_fan_out, session_factory, reply.id, current_user)
        return to_reply_response(reply, current_user.username)

    return router


forums_router = build_post_router(PostKind.FORUM, "/forums")
notes_router = build_post_router(PostKind.NOTE, "/notes")

__all__ = ["build_post_router", "forums_router", "notes_router"]
