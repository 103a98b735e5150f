"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations; database_create_all (or
create_all() in tests) builds it directly from the models instead.

Engine and session factory are created lazily on first use (get_db /
get_db_transactional) so import does not trigger Settings validation.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from tasks_management.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _engine_kwargs(database_url: str) -> dict[str, Any]:
    """Driver-specific engine options. In-memory SQLite shares one connection."""
    settings = get_settings()
    kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/").endswith("aiosqlite:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    kwargs["pool_pre_ping"] = True
    kwargs["pool_recycle"] = 3600
    kwargs["pool_size"] = settings.db_pool_size if settings.db_pool_size is not None else 10
    kwargs["max_overflow"] = (
        settings.db_max_overflow if settings.db_max_overflow is not None else 20
    )
    return kwargs


def _enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINT and ROLLBACK TO work on SQLite.

    The sqlite3 driver otherwise opens and commits transactions on its own,
    which releases savepoints early.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    database_url = get_settings().database_url
    engine = create_async_engine(database_url, **_engine_kwargs(database_url))
    if database_url.startswith("sqlite"):
        _enable_sqlite_savepoints(engine)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))


async def create_all() -> None:
    """Create every table from the ORM models (local development and tests)."""
    ensure_engine()
    import tasks_management.infrastructure.persistence.models  # noqa: F401

    assert engine is not None
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Dispose the engine and forget the session factory (shutdown and tests)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    Yields a session and closes it on exit.
    """
    ensure_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        yield session


async def get_db_transactional() -> AsyncIterator[AsyncSession]:
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception.
    The request is the unit of work: task, resource and asset writes made
    through this session commit or roll back together, except where a
    repository savepoint rolls back one block on its own (bulk delete).
    Use for POST, PUT, PATCH, DELETE endpoints.
    """
    ensure_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        async with session.begin():
            yield session
