import os
import uuid
import pytest
import pytest_asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient, ASGITransport
from jose import jwt
from pytest_asyncio import is_async_test
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator

# Configure database and auth for tests via settings module rather than
# hardcoding directly. Allow overriding with TEST_DATABASE_URL; fall back to a
# local sqlite file.
TEST_SECRET = "test-secret-key"
test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./tests/test.db")
os.environ["DATABASE_URL"] = test_db_url
os.environ["AUTH_ENABLED"] = "true"
os.environ["AUTH_SECRET_KEY"] = TEST_SECRET
for _var in ("AUTH_DOMAIN", "AUTH_API_AUDIENCE"):
    os.environ.pop(_var, None)

from forum.core import config as _config  # noqa: E402
_config.get_settings.cache_clear()  # ensure new env vars are picked up # type: ignore[attr-defined]
_settings = _config.get_settings()

from forum.api.main import app  # noqa: E402
from forum.db.session import AsyncSessionLocal, engine, Base  # noqa: E402
from forum.models.user import User  # noqa: E402
from forum.models.thread import Thread  # noqa: E402
from sqlalchemy import delete  # noqa: E402


def pytest_collection_modifyitems(items):
    # one event loop for the whole run: the engine and fixtures live in it
    session_loop = pytest.mark.asyncio(loop_scope="session")
    for item in items:
        if is_async_test(item):
            item.add_marker(session_loop, append=False)


@pytest_asyncio.fixture(autouse=True, scope="session")
async def prepare_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()

@pytest.fixture(scope="session")
def settings():
    """Expose application settings to tests if needed."""
    return _settings

@pytest_asyncio.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session

@pytest_asyncio.fixture()
async def client():
    # httpx >=0.28 removed the 'app=' shortcut; use ASGITransport explicitly
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

@pytest_asyncio.fixture(autouse=True)
async def _clear_tables():
    """Ensure isolated tests by clearing tables before each test.
    Order matters due to FK constraints: Thread -> User.
    """
    async with AsyncSessionLocal() as session:  # type: ignore
        await session.execute(delete(Thread))
        await session.execute(delete(User))
        await session.commit()
    yield


def make_token(sub: str, email: str | None = None, secret: str = TEST_SECRET, **claims) -> str:
    """Mint an HS256 access token the way the identity provider would."""
    now = datetime.now(timezone.utc)
    payload = {"sub": sub, "iat": now, "exp": now + timedelta(minutes=15), **claims}
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


@dataclass
class Actor:
    id: uuid.UUID
    email: str
    headers: dict[str, str]


def make_actor(name: str) -> Actor:
    user_id = uuid.uuid4()
    email = f"{name}-{user_id.hex[:8]}@example.com"
    token = make_token(str(user_id), email)
    return Actor(id=user_id, email=email, headers={"Authorization": f"Bearer {token}"})


@pytest.fixture()
def owner() -> Actor:
    return make_actor("owner")


@pytest.fixture()
def stranger() -> Actor:
    return make_actor("stranger")


@pytest.fixture()
def create_thread(client):
    """POST a thread as ``actor`` and return the serialized record."""
    async def _create(actor: Actor, title: str = "test title", body: str = "test body") -> dict:
        resp = await client.post(
            "/api/v1/threads", json={"title": title, "body": body}, headers=actor.headers
        )
        assert resp.status_code == 200, resp.text
        return resp.json()["thread"]
    return _create


@pytest_asyncio.fixture()
async def stored_user(db_session: AsyncSession) -> User:
    u = User(email=f"stored-{uuid.uuid4().hex[:8]}@example.com")
    db_session.add(u)
    await db_session.flush()
    return u
