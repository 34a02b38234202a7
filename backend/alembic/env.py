"""
Alembic Migration Environment
=============================

Usage (from backend/):
    alembic upgrade head
    alembic -x database_url=sqlite+aiosqlite:///./notes.db upgrade head

Database URL, first match wins:
    1. config.attributes["database_url"]  (programmatic callers, tests)
    2. -x database_url=...                 (command line)
    3. Settings.database_url               (DATABASE_URL / .env)

SQLite runs in batch mode, since it cannot ALTER most column properties.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from notes_api.config import settings
from notes_api.database import Base
from notes_api.models.note import Note  # noqa: F401

config = context.config

if config.config_file_name is not None:
    # Keep loggers the application configured before migrations ran
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _database_url() -> str:
    return (
        config.attributes.get("database_url")
        or context.get_x_argument(as_dictionary=True).get("database_url")
        or settings.database_url
    )


def _configure(**kwargs) -> None:
    url = _database_url()
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Print the migration SQL instead of executing it."""
    _configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_on_connection(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(_database_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
