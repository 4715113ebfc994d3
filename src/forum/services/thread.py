"""Service helpers for thread domain logic.

Adds higher-level operations on top of repository helpers: field validation
before persistence and not-found error mapping. Callers own the transaction
and commit after a successful mutation.
"""

import logging
import uuid
from typing import Any, Mapping
from sqlalchemy.ext.asyncio import AsyncSession

from forum.core.errors import ThreadNotFoundError
from forum.repositories import thread as thread_repo
from forum.models.thread import Thread
from forum.services.validation import validate_required, validate_present

logger = logging.getLogger(__name__)

__all__ = [
    "ThreadNotFoundError",
    "create_thread",
    "get_thread_or_404",
    "list_threads",
    "update_thread",
    "delete_thread",
]


async def create_thread(
    session: AsyncSession, *, user_id: uuid.UUID, fields: Mapping[str, Any]
) -> Thread:
    values = validate_required(fields)
    thread = await thread_repo.create(
        session, user_id=user_id, title=values["title"], body=values["body"]
    )
    logger.info("thread created", extra={"thread_id": thread.id, "user_id": user_id})
    return thread


async def get_thread_or_404(session: AsyncSession, thread_id: int) -> Thread:
    thread = await thread_repo.get_by_id(session, thread_id)
    if not thread:
        raise ThreadNotFoundError()
    return thread


async def list_threads(session: AsyncSession) -> list[Thread]:
    return await thread_repo.list_all(session)


async def update_thread(
    session: AsyncSession,
    thread_id: int,
    fields: Mapping[str, Any],
    *,
    thread: Thread | None = None,
) -> Thread:
    """Merge only the supplied ``title`` / ``body`` into the stored thread.

    Pass ``thread`` when the caller already loaded it to skip the lookup.
    """
    if thread is None:
        thread = await get_thread_or_404(session, thread_id)
    changes = validate_present(fields)
    thread = await thread_repo.update(
        session, thread, title=changes.get("title"), body=changes.get("body")
    )
    logger.info("thread updated", extra={"thread_id": thread.id, "fields": sorted(changes)})
    return thread


async def delete_thread(session: AsyncSession, thread_id: int, *, thread: Thread | None = None) -> None:
    if thread is None:
        thread = await get_thread_or_404(session, thread_id)
    await thread_repo.delete(session, thread)
    logger.info("thread deleted", extra={"thread_id": thread_id})
