from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pokemon_review.database.session import get_async_session
from pokemon_review.repositories import (
    CategoryRepository,
    ReviewRepository,
    ReviewerRepository,
    PokemonRepository,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    # One session per request; tests override this dependency
    async for session in get_async_session():
        yield session


def get_category_repository(db: AsyncSession = Depends(get_db_session)) -> CategoryRepository:
    return CategoryRepository(db)


def get_review_repository(db: AsyncSession = Depends(get_db_session)) -> ReviewRepository:
    return ReviewRepository(db)


def get_reviewer_repository(db: AsyncSession = Depends(get_db_session)) -> ReviewerRepository:
    return ReviewerRepository(db)


def get_pokemon_repository(db: AsyncSession = Depends(get_db_session)) -> PokemonRepository:
    return PokemonRepository(db)
