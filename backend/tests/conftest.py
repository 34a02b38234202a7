"""
Notes API - Test Configuration (conftest.py)
============================================

Shared pytest fixtures.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:   AsyncMock session for service unit tests
    ├── sample_note_data:  field values for a stored note
    ├── test_settings:     Settings with env files ignored, port 0 on loopback
    ├── db_engine:         in-memory SQLite engine with the schema created
    ├── configured_app:    application after prefix + docs, sessions bound to db_engine
    └── test_client:       HTTPX AsyncClient talking to configured_app over ASGI
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Must run before any notes_api import: the settings singleton and the
# database engine are created at import time.
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='notes_api_test_')}/test.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notes_api.bootstrap import prepare_application
from notes_api.config import Settings
from notes_api.database import Base, dispose_engine, get_db_session
from notes_api.models.note import Note  # noqa: F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
            result = await note_service.get_note(mock_db_session, note_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note_data():
    now = datetime.now(timezone.utc)
    return {
        "id": uuid4(),
        "title": "Groceries",
        "content": "Milk, eggs, bread",
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def test_settings():
    """Settings independent of the developer's environment and .env file."""
    return Settings(_env_file=None, port=0, host="127.0.0.1")


@pytest_asyncio.fixture
async def db_engine():
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
async def configured_app(test_settings, db_engine):
    """
    Application after bootstrap steps 1-5, not listening.

    Note routes get sessions from the in-memory engine; the health route
    keeps using the module-level engine (SQLite file from DATABASE_URL).
    """
    session_factory = async_sessionmaker(db_engine, expire_on_commit=False)

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = await prepare_application(test_settings)
    app.http.dependency_overrides[get_db_session] = override_db_session
    yield app
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(configured_app):
    """
    HTTPX AsyncClient routed straight to the ASGI app (no socket).

    Usage:
        async def test_docs(test_client):
            response = await test_client.get("/api")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=configured_app.http)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
