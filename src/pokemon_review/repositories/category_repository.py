"""
Category repository: category CRUD plus the "pokemon by category" association query.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
import logging

from pokemon_review.database.base import fits_integer_column
from pokemon_review.models.category import Category
from pokemon_review.models.pokemon import Pokemon, PokemonCategory
from .base_repository import BaseRepository, RepositoryError

logger = logging.getLogger(__name__)


class CategoryRepository(BaseRepository[Category]):

    def __init__(self, db: AsyncSession):
        super().__init__(Category, db)

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get_categories(self) -> list[Category]:
        return await self.list_all(order_by="id")

    async def get_category(self, category_id: int) -> Category | None:
        return await self.get_by_id(category_id)

    async def category_exists(self, category_id: int) -> bool:
        return await self.exists(category_id)

    async def get_pokemon_by_category(self, category_id: int) -> list[Pokemon]:
        """
        Return the pokemon associated with a category.

        The category id is not validated: an unknown id simply yields an empty list.
        """
        if not fits_integer_column(category_id):
            return []

        try:
            query = (
                select(Pokemon)
                .join(PokemonCategory, PokemonCategory.pokemon_id == Pokemon.id)
                .where(PokemonCategory.category_id == category_id)
                .order_by(Pokemon.id)
            )
            result = await self.db.execute(query)
            pokemon = list(result.scalars().all())

            logger.debug(f"Found {len(pokemon)} pokemon for category {category_id}")
            return pokemon

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving pokemon for category {category_id}: {e}")
            raise RepositoryError("Failed to retrieve pokemon by category") from e

    # =================================================================================================================
    # Mutations
    # =================================================================================================================

    async def create_category(self, category: Category) -> bool:
        return await self.add(category)

    async def update_category(self, category: Category) -> bool:
        return await self.merge(category)

    async def delete_category(self, category: Category | None) -> bool:
        """Delete a category; its pokemon associations are removed with it."""
        return await self.remove(category)
