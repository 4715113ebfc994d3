"""Repository helpers for the Thread model."""

import uuid
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from forum.models.thread import Thread
from forum.services.validation import validate_required

__all__ = [
    "get_by_id",
    "list_all",
    "create",
    "update",
    "delete",
]


async def get_by_id(session: AsyncSession, thread_id: int) -> Optional[Thread]:
    res = await session.execute(select(Thread).where(Thread.id == thread_id))
    return res.scalar_one_or_none()


async def list_all(session: AsyncSession) -> list[Thread]:
    # insertion order
    res = await session.execute(select(Thread).order_by(Thread.id))
    return list(res.scalars().all())


async def create(
    session: AsyncSession,
    *,
    user_id: uuid.UUID,
    title: str | None,
    body: str | None,
) -> Thread:
    validate_required({"title": title, "body": body})
    thread = Thread(title=title, body=body, user_id=user_id)
    session.add(thread)
    # Flush so INSERT is issued and the id is assigned, then refresh so that
    # serialization never triggers a lazy load (MissingGreenlet under asyncio).
    await session.flush()
    await session.refresh(thread)
    return thread


async def update(
    session: AsyncSession,
    thread: Thread,
    *,
    title: str | None = None,
    body: str | None = None,
) -> Thread:
    if title is not None:
        thread.title = title
    if body is not None:
        thread.body = body
    thread.touch()
    await session.flush()
    await session.refresh(thread)
    return thread


async def delete(session: AsyncSession, thread: Thread) -> None:
    await session.delete(thread)
    await session.flush()
