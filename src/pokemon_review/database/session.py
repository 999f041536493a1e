from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from pokemon_review.config import get_settings
from .base import Base


# The engine is built on first use rather than at import time, so importing the
# app (e.g. in tests that override the session dependency) never needs a DB driver.
@lru_cache()
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,
        pool_pre_ping=True,              # Enables connection health checks
    )


@lru_cache()
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields one session per request and closes it afterwards.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with get_session_maker()() as session:
        yield session


async def create_all(engine: AsyncEngine | None = None) -> None:
    """Create every table registered on `Base.metadata` (used when DB_CREATE_ALL is set)."""
    # Register the models with Base.metadata before creating tables
    from pokemon_review import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
