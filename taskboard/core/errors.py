"""
Error taxonomy for the Taskboard service.

Every error a handler raises on purpose derives from ``TaskboardError`` and
carries the HTTP status it maps to. Rows the datastore rejects on insert
(unique email, foreign keys, NOT NULL) are re-raised as ``Conflict`` with the
driver's message; any other ``sqlalchemy.exc.SQLAlchemyError`` is turned into
a 500 response by the server's exception handlers.
"""

from __future__ import annotations

from typing import Optional


class TaskboardError(Exception):
    """Base class for all service errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(TaskboardError):
    """No bearer token was presented on a protected route."""

    status_code = 401
    default_message = "Authentication required"


class Forbidden(TaskboardError):
    """A bearer token was presented but could not be verified.

    The message is the same for expired, tampered and malformed tokens.
    """

    status_code = 403
    default_message = "Invalid or expired token"


class NotFound(TaskboardError):
    status_code = 404
    default_message = "Not found"


class TaskNotFound(NotFound):
    """No task matched both the task id and the acting principal."""

    default_message = "Task not found"


class UserNotFound(TaskboardError):
    """Login was attempted for an email that is not registered."""

    status_code = 400
    default_message = "User not found"


class InvalidCredentials(TaskboardError):
    status_code = 401
    default_message = "Invalid password"


class Conflict(TaskboardError):
    """The datastore rejected a write (surfaced as a generic server error)."""

    status_code = 500
