"""
Review repository.

Besides the usual CRUD wrappers it exposes the per-pokemon listing and the
batch delete used when all of a reviewer's reviews are removed at once.
"""

from typing import Iterable
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from pokemon_review.models.review import Review
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):

    def __init__(self, db: AsyncSession):
        super().__init__(Review, db)

    async def get_reviews(self) -> list[Review]:
        return await self.list_all(order_by="id")

    async def get_review(self, review_id: int) -> Review | None:
        return await self.get_by_id(review_id)

    async def review_exists(self, review_id: int) -> bool:
        return await self.exists(review_id)

    async def get_reviews_of_pokemon(self, pokemon_id: int) -> list[Review]:
        """Reviews written about one pokemon (empty for an unknown pokemon id)."""
        return await self.find_all_by(pokemon_id=pokemon_id)

    async def create_review(self, review: Review) -> bool:
        return await self.add(review)

    async def update_review(self, review: Review) -> bool:
        return await self.merge(review)

    async def delete_review(self, review: Review | None) -> bool:
        return await self.remove(review)

    async def delete_reviews(self, reviews: Iterable[Review]) -> bool:
        """
        Delete a batch of reviews in a single commit.

        Returns one flag for the whole batch; there is no per-review result.
        """
        reviews = list(reviews)
        logger.info(f"Deleting batch of {len(reviews)} reviews")
        return await self.remove_many(reviews)
