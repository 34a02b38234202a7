"""
Notes API - Database Session Management
=======================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   One engine per process; a session per request that commits on
       success and rolls back on error.
Who:   Route handlers via Depends(get_db_session); the lifespan handler
       disposes the engine on shutdown.

Connection pooling (non-SQLite URLs only):
    pool_size / max_overflow come from settings, connections are validated
    before use (pool_pre_ping) and recycled every hour.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import settings


def _engine_options() -> Dict[str, Any]:
    """Engine keyword arguments for the configured database URL."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    # SQLite pools do not accept sizing arguments
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for autogenerate.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    1. Creates a new session from the factory
    2. Yields it to the route handler
    3. On success: commits the transaction
    4. On error: rolls back and re-raises for the global error handler
    5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the lifespan shutdown."""
    await engine.dispose()
