"""Domain exceptions raised by the service layer.

Services never raise ``HTTPException`` directly; the application installs a
single handler that maps each class below to its HTTP status code.
"""

from __future__ import annotations

from fastapi import status


class NoteboardError(RuntimeError):
    """Base exception for all expected, caller-visible failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(NoteboardError):
    """Missing or malformed input; no mutation was attempted."""

    status_code = status.HTTP_400_BAD_REQUEST


class Conflict(NoteboardError):
    """A uniqueness rule on title, username or email was violated."""

    status_code = status.HTTP_409_CONFLICT


class NotFound(NoteboardError):
    """The referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class Forbidden(NoteboardError):
    """Authenticated, but not allowed to act on this record."""

    status_code = status.HTTP_403_FORBIDDEN


class Unauthorized(NoteboardError):
    """No identity, or credentials that do not resolve to a usable account."""

    status_code = status.HTTP_401_UNAUTHORIZED
