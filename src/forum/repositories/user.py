"""Repository helpers for locally mirrored users."""

import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
from forum.models.user import User

__all__ = ["get_by_id", "get_by_email", "create"]


async def get_by_id(session: AsyncSession, id: uuid.UUID) -> Optional[User]:
    res = await session.execute(select(User).where(User.id == id))
    return res.scalar_one_or_none()


async def get_by_email(session: AsyncSession, email: str) -> Optional[User]:
    res = await session.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def create(session: AsyncSession, *, email: str, id: uuid.UUID, role: str = "user") -> User:
    user = User(email=email, id=id, role=role)
    session.add(user)
    await session.flush()
    # load server defaults (created_at) while we are still inside the greenlet
    await session.refresh(user)
    return user
