"""
MarkNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        Fresh in-memory SQLite database with the notes table
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       One AsyncSession on that database
    ├── note_store:       SQLNoteStore over db_session
    ├── file_db_engine:   SQLite file database with a real connection pool
    ├── mock_db_session:  AsyncMock session for fault injection
    ├── test_client:      HTTPX AsyncClient wired to the app and db_engine
    └── unguarded_client: Same, but unhandled errors come back as 500 responses
"""

import os

# Settings are read at import time; point them at throwaway values first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["MARKDOWN_STRICT"] = "false"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from marknotes.database import Base, get_db_session
from marknotes.models.note import Note  # noqa: F401
from marknotes.stores import SQLNoteStore


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Provides an empty in-memory SQLite database per test.

    StaticPool keeps a single connection alive; an in-memory database
    disappears when its last connection closes.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def file_db_engine(tmp_path):
    """
    Provides an empty SQLite file database with one connection per session.

    Unlike db_engine, sessions do not share a connection, so concurrent
    transactions behave as they would against a real server.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def note_store(db_session):
    """SQLNoteStore over a real (in-memory) database."""
    return SQLNoteStore(db_session)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        await SQLNoteStore(mock_db_session).find_all()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    How:  ASGITransport routes requests straight into the app; the session
          dependency is overridden to use the per-test database.

    Usage:
        async def test_index(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    from marknotes.main import app

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def groceries():
    """The (title, content) pair used across scenarios."""
    return {"title": "Groceries", "content": "- milk\n- eggs\n"}


@pytest_asyncio.fixture
async def unguarded_client(test_client):
    """
    Like test_client, but unhandled exceptions are not re-raised into the test.

    Starlette's ServerErrorMiddleware sends the 500 response and then re-raises;
    raise_app_exceptions=False lets the test inspect that response.
    """
    from marknotes.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
