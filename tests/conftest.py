"""Pytest configuration and fixtures for tasks-management.

Every test gets a fresh in-memory SQLite database: the engine is disposed and
recreated around each test, and with one shared connection (StaticPool) the
database lives exactly as long as the engine.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("DATABASE_CREATE_ALL", "false")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tasks_management.core.config import get_settings
from tasks_management.infrastructure.persistence import database
from tasks_management.infrastructure.persistence.repositories import UserRepository

get_settings.cache_clear()

COMPANY_ID = 10
GROUP_ID = 100
CREATOR_ID = 1
ASSIGNEE_ID = 2
OTHER_USER_ID = 3


async def _seed_users(session: AsyncSession) -> None:
    """Create three users; the user counter hands out ids 1, 2 and 3 in order."""
    repo = UserRepository(session)
    await repo.create_user(COMPANY_ID, "jdoe", "Jane", "Doe")
    await repo.create_user(COMPANY_ID, "rroe", "Rick", "Roe")
    await repo.create_user(COMPANY_ID, "solo")


@pytest.fixture
async def database_engine():
    """Fresh schema in a new in-memory database; disposed after the test."""
    get_settings.cache_clear()
    await database.dispose_engine()
    await database.create_all()
    yield database.engine
    await database.dispose_engine()


@pytest.fixture
async def db_session(database_engine) -> AsyncSession:
    """Session with seeded users for repository/integration tests. Rolled back after the test."""
    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        await _seed_users(session)
        await session.flush()
        yield session
        await session.rollback()


@pytest.fixture
async def app(database_engine) -> FastAPI:
    """Fresh app with seeded users committed. Dependency overrides are cleared after the test."""
    from tasks_management.main import create_app

    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            await _seed_users(session)

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def scope_headers() -> dict[str, str]:
    """Headers naming the acting company, group and user."""
    return {
        "X-Company-ID": str(COMPANY_ID),
        "X-Group-ID": str(GROUP_ID),
        "X-User-ID": str(CREATOR_ID),
    }
