# src/noteboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    forums_router,
    likes_router,
    notes_router,
    notifications_router,
    users_router,
)

__all__ = [
    "auth_router",
    "forums_router",
    "notes_router",
    "likes_router",
    "notifications_router",
    "users_router",
]
