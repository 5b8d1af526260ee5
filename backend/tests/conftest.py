"""
Pytest configuration and fixtures for Taskboard tests.
"""

import os

# Settings are cached on first import; fix them before anything loads them
os.environ.setdefault("TASKBOARD_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("TASKBOARD_JWT_SECRET", "test-secret-0123456789abcdef0123456789")
os.environ.setdefault("TASKBOARD_BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from taskboard.main import app
from taskboard.database import get_session


# One in-memory database per test; StaticPool keeps every session on the same connection
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def test_session(session_maker):
    """Create a test database session."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_maker):
    """Create an async test client with test database."""

    async def override_get_session():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    # Unhandled errors come back as 500 responses instead of propagating into the test
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _register(client: AsyncClient, name: str, email: str, password: str = "password123") -> dict:
    """Register a user and return auth headers for them."""
    resp = await client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest_asyncio.fixture(scope="function")
async def auth_headers(client):
    """Bearer headers for a freshly registered user."""
    return await _register(client, "Alice", "alice@example.com")


@pytest_asyncio.fixture(scope="function")
async def other_auth_headers(client):
    """Bearer headers for a second, unrelated user."""
    return await _register(client, "Bob", "bob@example.com")


@pytest_asyncio.fixture(scope="function")
async def project(client, auth_headers):
    """A project owned by the auth_headers user."""
    resp = await client.post(
        "/projects",
        json={"name": "Launch", "description": "Ship it"},
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest_asyncio.fixture(scope="function")
async def make_user(client):
    """Factory registering additional users; returns their auth headers."""

    async def _make(name: str, email: str, password: str = "password123") -> dict:
        return await _register(client, name, email, password)

    return _make
