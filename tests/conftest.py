"""Pytest configuration and shared fixtures.

Tests run against a throwaway SQLite database (aiosqlite). Tables are
created fresh for every test and the engine is disposed afterwards so
nothing outlives the test's event loop.
"""

import os
import tempfile
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Configure BEFORE importing the app so the settings singleton sees it
_DB_DIR = tempfile.mkdtemp(prefix="sprout-tests-")
os.environ["TESTING"] = "true"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["LOG_FORMAT"] = "text"

from sprout_api.config import settings

settings.testing = True

from sprout_api.database import get_engine, get_session_maker, reset_database
from sprout_api.main import app
from sprout_api.models import Baby, Base, Family

from helpers import RecordingChannel


@pytest_asyncio.fixture(autouse=True)
async def db_engine():
    """Create all tables before each test and drop them afterwards."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await reset_database()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for each test."""
    async with get_session_maker()() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing the API."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Data fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def family(db_session: AsyncSession) -> Family:
    family = Family(slug=f"family-{uuid.uuid4().hex[:8]}", name="Test Family")
    db_session.add(family)
    await db_session.commit()
    await db_session.refresh(family)
    return family


@pytest_asyncio.fixture
async def baby(db_session: AsyncSession, family: Family) -> Baby:
    baby = Baby(family_id=family.id, first_name="Ada", last_name="Test")
    db_session.add(baby)
    await db_session.commit()
    await db_session.refresh(baby)
    return baby


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()
