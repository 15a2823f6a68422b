from __future__ import annotations

import os
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Load dotenv files early so test fixtures can read overrides via os.getenv
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    load_dotenv(TEST_ROOT / ".env", override=False)
except ImportError:
    pass

# Settings are read once at import time, so the test values must be in place first
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENABLE_FILE_LOGGING", "false")

from taskboard.core.database import Datastore  # noqa: E402
from taskboard.core.database.entities import User  # noqa: E402
from taskboard.core.database.repositories.users import UserRepository  # noqa: E402


@pytest_asyncio.fixture
async def datastore(tmp_path: Path) -> AsyncGenerator[Datastore, None]:
    """A file-backed SQLite datastore with the schema created.

    A file rather than ``:memory:`` so that concurrent sessions get their own
    pooled connections to the same database.
    """
    store = Datastore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'taskboard.db'}")
    await store.create_tables()
    try:
        yield store
    finally:
        await store.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(datastore: Datastore) -> AsyncGenerator[AsyncSession, None]:
    async with datastore.session() as session:
        yield session


@pytest_asyncio.fixture
async def user(session: AsyncSession) -> User:
    return await UserRepository(session).create(name="Ada", email="ada@example.com", password_hash="not-a-hash")


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    return await UserRepository(session).create(name="Bob", email="bob@example.com", password_hash="not-a-hash")


@pytest.fixture
def app(datastore: Datastore):
    from taskboard.server.main import create_app

    return create_app(datastore=datastore)


@pytest_asyncio.fixture(name="client")
async def client_fixture(app) -> AsyncGenerator[AsyncClient, None]:
    """An async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client


async def register_and_login(client: AsyncClient, email: str, password: str = "s3cret-pass", name: str = "User") -> dict:
    """Register ``email`` and return the Authorization header for it."""
    response = await client.post("/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 200, response.text
    response = await client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> dict:
    return await register_and_login(client, "alice@example.com", name="Alice")


@pytest_asyncio.fixture
async def other_auth_headers(client: AsyncClient) -> dict:
    return await register_and_login(client, "bob@example.com", name="Bob")


@pytest.fixture
def login_as(client: AsyncClient):
    """Factory fixture: ``await login_as(email)`` registers, logs in and returns auth headers."""

    async def _login_as(email: str, password: str = "s3cret-pass", name: str = "User") -> dict:
        return await register_and_login(client, email, password=password, name=name)

    return _login_as
