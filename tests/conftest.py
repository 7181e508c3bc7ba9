"""
Pytest configuration and fixtures.

This file is automatically discovered by pytest and provides
shared fixtures for all test modules.

Every test gets its own in-memory SQLite database, so tests never see each
other's rows and nothing needs to be cleaned up.
"""

import os

# Must be set before deal_monitor.core.config is imported
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import deal_monitor.models  # noqa: F401
from deal_monitor.db.base import Base
from deal_monitor.db.deps import get_db, get_db_override
from deal_monitor.main import app
from deal_monitor.repositories import KeywordRepository, PostRepository, SubredditRepository

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ================================
# Database Fixtures
# ================================

@pytest_asyncio.fixture
async def test_engine():
    """
    In-memory SQLite engine with the schema created.

    StaticPool keeps the single connection alive, otherwise each new
    connection would see an empty database.
    """
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session bound to the per-test engine."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def keyword_repository(db_session: AsyncSession) -> KeywordRepository:
    return KeywordRepository(db_session)


@pytest.fixture
def subreddit_repository(db_session: AsyncSession) -> SubredditRepository:
    return SubredditRepository(db_session)


@pytest.fixture
def post_repository(db_session: AsyncSession) -> PostRepository:
    return PostRepository(db_session)


# ================================
# FastAPI Client Fixtures
# ================================

@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client for the FastAPI app.

    Overrides the get_db dependency to use the test session.

    Usage:
        async def test_something(client: AsyncClient):
            response = await client.get("/api/keywords")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_db] = get_db_override(db_session)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ================================
# Utility Fixtures
# ================================

@pytest.fixture
def sample_post_data() -> dict:
    return {
        "title": "  [GPU] RTX 4070 Super - $549  ",
        "description": "Lowest price so far at the usual retailer.",
        "links": ["https://example.com/deal", "https://example.com/coupon"],
    }
