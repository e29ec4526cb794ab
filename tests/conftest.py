"""
Pytest fixtures - in-memory test DB, API client, seeded users.
Each test gets a fresh SQLite database; requests get their own committing session like in production.
"""

import os
from typing import AsyncGenerator

# Must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from task_manager.db.base import Base
from task_manager.db.session import enable_sqlite_savepoints, get_db
from task_manager.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Session for repository tests. Do not mix with `client` in the same test."""
    async with session_maker() as s:
        yield s


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(client: AsyncClient) -> dict:
    response = await client.post("/api/users", json={"name": "Test User", "email": "test@example.com"})
    assert response.status_code == 201
    return response.json()["data"]


@pytest_asyncio.fixture
async def test_task(client: AsyncClient, test_user: dict) -> dict:
    response = await client.post(
        "/api/tasks",
        json={
            "title": "Test Task",
            "description": "This is a test task",
            "status": "pending",
            "deadline": "2024-12-31",
            "user_id": test_user["id"],
        },
    )
    assert response.status_code == 201
    return response.json()["data"]
