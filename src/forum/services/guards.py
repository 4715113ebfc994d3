"""Per-operation guard pipelines for the thread resource.

Each mutating operation runs an ordered tuple of guards over a
``ThreadContext`` before the store is touched. Order is part of the HTTP
contract: authentication, then existence, then ownership, then field
validation. A guard either enriches the context (``load_thread``) or raises a
``ForumError`` subclass, which ends the request before any write happens.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from forum.core.errors import ThreadNotFoundError, UnauthenticatedError
from forum.models.thread import Thread
from forum.models.user import User
from forum.services.ownership import ensure_can_modify
from forum.services.thread import get_thread_or_404
from forum.services.validation import extract_fields, validate_required, validate_present

__all__ = [
    "MAX_THREAD_ID",
    "parse_thread_id",
    "ThreadContext",
    "Guard",
    "require_identity",
    "load_thread",
    "require_owner",
    "validate_create_fields",
    "validate_update_fields",
    "run_guards",
    "SHOW_GUARDS",
    "CREATE_GUARDS",
    "UPDATE_GUARDS",
    "DELETE_GUARDS",
]


# threads.id is an INTEGER (int4 on Postgres)
MAX_THREAD_ID = 2**31 - 1


def parse_thread_id(raw: str | int) -> int:
    """Turn a path id into a thread id; anything that cannot name a row is a 404."""
    text = str(raw)
    if not (text.isascii() and text.isdigit()):
        raise ThreadNotFoundError()
    thread_id = int(text)
    if not 0 < thread_id <= MAX_THREAD_ID:
        raise ThreadNotFoundError()
    return thread_id


@dataclass
class ThreadContext:
    session: AsyncSession
    identity: User | None = None
    thread_id: str | int | None = None
    payload: Any = None
    fields: dict[str, Any] = field(default_factory=dict)
    thread: Thread | None = None

    @property
    def user(self) -> User:
        if self.identity is None:
            raise UnauthenticatedError()
        return self.identity

    @property
    def loaded_thread(self) -> Thread:
        if self.thread is None:
            raise RuntimeError("load_thread must run before the thread is used")
        return self.thread


Guard = Callable[[ThreadContext], Awaitable[None]]


async def require_identity(ctx: ThreadContext) -> None:
    if ctx.identity is None:
        raise UnauthenticatedError()


async def load_thread(ctx: ThreadContext) -> None:
    if ctx.thread_id is None:
        raise ThreadNotFoundError()
    ctx.thread = await get_thread_or_404(ctx.session, parse_thread_id(ctx.thread_id))


async def require_owner(ctx: ThreadContext) -> None:
    ensure_can_modify(ctx.loaded_thread, ctx.identity)


async def validate_create_fields(ctx: ThreadContext) -> None:
    ctx.fields = validate_required(extract_fields(ctx.payload))


async def validate_update_fields(ctx: ThreadContext) -> None:
    ctx.fields = validate_present(extract_fields(ctx.payload))


SHOW_GUARDS: tuple[Guard, ...] = (load_thread,)
CREATE_GUARDS: tuple[Guard, ...] = (require_identity, validate_create_fields)
UPDATE_GUARDS: tuple[Guard, ...] = (require_identity, load_thread, require_owner, validate_update_fields)
DELETE_GUARDS: tuple[Guard, ...] = (require_identity, load_thread, require_owner)


async def run_guards(ctx: ThreadContext, guards: Iterable[Guard]) -> ThreadContext:
    for guard in guards:
        await guard(ctx)
    return ctx
