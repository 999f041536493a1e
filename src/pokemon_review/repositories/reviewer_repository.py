from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
import logging

from pokemon_review.database.base import fits_integer_column
from pokemon_review.models.reviewer import Reviewer
from pokemon_review.models.review import Review
from .base_repository import BaseRepository, RepositoryError

logger = logging.getLogger(__name__)


class ReviewerRepository(BaseRepository[Reviewer]):
    """Read access to reviewers and the reviews they authored."""

    def __init__(self, db: AsyncSession):
        super().__init__(Reviewer, db)

    async def get_reviewers(self) -> list[Reviewer]:
        return await self.list_all(order_by="id")

    async def get_reviewer(self, reviewer_id: int) -> Reviewer | None:
        return await self.get_by_id(reviewer_id)

    async def reviewer_exists(self, reviewer_id: int) -> bool:
        return await self.exists(reviewer_id)

    async def get_reviews_by_reviewer(self, reviewer_id: int) -> list[Review]:
        """
        Return every review written by a reviewer, ordered by review id.

        Queried directly rather than through `Reviewer.reviews` so no lazy
        load is triggered on an async session.
        """
        if not fits_integer_column(reviewer_id):
            return []

        try:
            result = await self.db.execute(
                select(Review).where(Review.reviewer_id == reviewer_id).order_by(Review.id)
            )
            reviews = list(result.scalars().all())

            logger.debug(f"Found {len(reviews)} reviews by reviewer {reviewer_id}")
            return reviews

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving reviews by reviewer {reviewer_id}: {e}")
            raise RepositoryError("Failed to retrieve reviews by reviewer") from e
