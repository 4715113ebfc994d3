"""Thread ownership policy."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from forum.core.errors import ForbiddenError

if TYPE_CHECKING:
    from forum.models.thread import Thread
    from forum.models.user import User


def can_modify(thread: "Thread", acting_user_id: uuid.UUID | None) -> bool:
    """Return True iff ``acting_user_id`` owns ``thread``.

    Applies identically to update and delete. Anonymous callers (``None``)
    never own anything.
    """
    if acting_user_id is None:
        return False
    return thread.user_id == acting_user_id


def ensure_can_modify(thread: "Thread", user: "User | None") -> None:
    """Raise ForbiddenError unless ``user`` owns ``thread``.

    Raises:
        ForbiddenError: 403 if the thread belongs to a different user.
    """
    if not can_modify(thread, user.id if user is not None else None):
        raise ForbiddenError()
