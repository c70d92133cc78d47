"""
Happy Thoughts API - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the test suite.
How:   Points the app at a throwaway SQLite file (aiosqlite) before any
       application module is imported, then creates and drops the tables
       around each API test.

Fixtures:
    db_tables:        fresh schema for one test, engine disposed afterwards
    db_session:       AsyncSession on the test database
    mock_db_session:  AsyncMock session for pure unit tests
    test_client:      HTTPX AsyncClient wired to the FastAPI app
    signup:           factory that registers a user and returns its payload
"""

import os
import tempfile
from typing import Any, Callable, Dict
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
_TEST_DB_DIR = tempfile.mkdtemp(prefix="happy_thoughts_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["RESET_DB"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from happy_thoughts.database import Base, async_session_factory, engine  # noqa: E402
from happy_thoughts import models  # noqa: E402,F401


@pytest_asyncio.fixture
async def db_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled aiosqlite connections belong to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_tables):
    async with async_session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        mock_db_session.get.return_value = thought
        await thought_service.get_thought(mock_db_session, thought.id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client(db_tables):
    """
    Async HTTP client talking to the app through ASGITransport.

    Usage:
        response = await test_client.get("/thoughts")
        assert response.status_code == 200
    """
    from happy_thoughts.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def signup(test_client) -> Callable:
    """Register a user and return the response payload (id, name, email, accessToken)."""

    async def _signup(name: str = "alice", email: str = None, password: str = "secret123") -> Dict[str, Any]:
        response = await test_client.post(
            "/users",
            json={"name": name, "email": email or f"{name}@example.com", "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()["response"]

    return _signup
