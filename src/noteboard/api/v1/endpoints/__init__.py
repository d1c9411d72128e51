# src/noteboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .likes import router as likes_router
from .notifications import router as notifications_router
from .posts import forums_router, notes_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "forums_router",
    "notes_router",
    "likes_router",
    "notifications_router",
    "users_router",
]
