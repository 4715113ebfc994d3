"""Project-wide custom exceptions.

This module centralizes domain-specific exception types so that routers,
guards and services can raise / catch them without importing deep
infrastructure errors like raw SQLAlchemy exceptions.

Every error carries the HTTP status it maps to; ``forum.api.main`` installs a
single exception handler that renders any ``ForumError`` as JSON. Add new
errors here rather than scattering small ``class XError(Exception):``
definitions across the codebase.
"""
from __future__ import annotations

from typing import Any


class ForumError(Exception):
    """Base class for all custom project exceptions.

    Subclass this rather than ``Exception`` directly for new domain errors.
    """
    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.detail}


class UnauthenticatedError(ForumError):
    """No valid identity accompanies a request that requires one."""
    status_code = 401
    default_detail = "Authentication required"


class ForbiddenError(ForumError):
    """Authenticated, but not allowed to act on the target record."""
    status_code = 403
    default_detail = "You do not have permission to modify this thread"


class NotFoundError(ForumError):
    status_code = 404
    default_detail = "Not found"


class ThreadNotFoundError(NotFoundError):
    default_detail = "Thread not found"


class ValidationError(ForumError):
    """A field is missing, empty or not text.

    Carries the offending field and the failed rule so clients can point at
    the right input, e.g. ``required validation failed on body``.
    """
    status_code = 400

    def __init__(self, field: str, validation: str = "required"):
        self.field = field
        self.validation = validation
        super().__init__(f"{validation} validation failed on {field}")

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.detail, "field": self.field, "validation": self.validation}


__all__ = [
    "ForumError",
    "UnauthenticatedError",
    "ForbiddenError",
    "NotFoundError",
    "ThreadNotFoundError",
    "ValidationError",
]
