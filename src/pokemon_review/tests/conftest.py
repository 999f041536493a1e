"""
Core pytest configuration for the entire test suite.

This module provides only the database setup and the HTTP client that every
kind of test needs. Domain-specific fixtures (repositories, seeded entities)
live in tests/test_fixtures/repository_fixtures.py and are imported at the
bottom so they are globally available.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block above the project imports: importing the app installs the
# logging config and SQLAlchemy may log during metadata registration.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from pokemon_review.database.base import Base
from pokemon_review import models  # noqa: F401 - registers tables on Base.metadata
from pokemon_review.core.dependencies import get_db_session
from pokemon_review.main import app

# In-memory SQLite shared by every connection of one engine (StaticPool)
TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh in-memory database per test.

    Each test gets its own engine, so committed rows never leak into the next
    test and no SAVEPOINT juggling is needed even though repositories commit.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    maker = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)

    async with maker() as session:
        yield session


# ------------------------------------------------------------------------------------------------
# HTTP CLIENT
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx client bound to the ASGI app, with the request session replaced by
    the test's `db_session`. Seeding fixtures and requests therefore share one
    session and one in-memory database.
    """
    async def _override_db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = _override_db_session
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_db_session, None)


# Repository and seeding fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    category_repository,
    review_repository,
    reviewer_repository,
    pokemon_repository,
    create_category,
    create_pokemon,
    create_reviewer,
    create_review,
    link_pokemon_category,
    seeded,
)
