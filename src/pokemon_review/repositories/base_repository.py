"""
Base repository class providing the shared persistence primitives.

Entity repositories (categories, reviews, reviewers, pokemon) inherit from
`BaseRepository` and expose typed, domain-named wrappers around it.

Two conventions hold for every repository:

- Reads raise `RepositoryError` when the store fails. A missing row is not a
  failure: `get_by_id()` returns None and `exists()` returns False. An id
  outside the INTEGER column range cannot match a row and is treated the same
  way without reaching the driver.
- Mutations never raise for store failures. They roll back the session, log
  the classified cause and return False, so request handlers can answer with a
  generic server error.

Each mutation is its own unit of work: `save()` flushes *and* commits.
"""
from pokemon_review.exceptions.base import RepositoryError
from pokemon_review.exceptions.integrity import describe_db_failure

import time
from typing import TypeVar, Generic, Type, Any, Iterable
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
import logging

from pokemon_review.database.base import Base, fits_integer_column

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

# Drivers raise OverflowError (not a SQLAlchemyError) for ints they cannot bind
STORE_ERRORS = (SQLAlchemyError, OverflowError)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over one SQLAlchemy model with an integer `id` primary key.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. Category, not Category())
            db: The async database session, usually injected per request
        """
        self.model = model
        self.db = db

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def list_all(self, order_by: str | None = "id") -> list[ModelType]:
        """
        Return every row of the model's table, ordered by `order_by` when that
        attribute exists on the model.
        """
        try:
            query = select(self.model)
            if order_by and hasattr(self.model, order_by):
                query = query.order_by(getattr(self.model, order_by))

            result = await self.db.execute(query)
            entities = list(result.scalars().all())

            logger.debug(
                f"Retrieved {len(entities)} {self.model.__name__} entities")
            return entities

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving all {self.model.__name__}: {e}")
            raise RepositoryError(
                f"Failed to retrieve {self.model.__name__} entities") from e

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its ID, or None when no row matches.

        Raises:
            RepositoryError: If the query itself fails.
        """
        if not fits_integer_column(entity_id):
            logger.debug(f"{self.model.__name__} ID {entity_id} is out of range")
            return None

        try:
            result = await self.db.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            entity = result.scalar_one_or_none()

            logger.debug(f"Retrieved {self.model.__name__} by ID: {entity_id}")
            return entity

        except SQLAlchemyError as e:
            logger.error(
                f"Error retrieving {self.model.__name__} by ID {entity_id}: {e}")
            raise RepositoryError(
                f"Failed to retrieve {self.model.__name__}") from e

    async def exists(self, entity_id: int) -> bool:
        """
        Check whether a row with this ID exists. Only the id column is selected.
        """
        if not fits_integer_column(entity_id):
            return False

        try:
            result = await self.db.execute(
                select(self.model.id).where(self.model.id == entity_id)
            )
            exists = result.scalar() is not None

            logger.debug(
                f"{self.model.__name__} with ID {entity_id} exists: {exists}")
            return exists

        except SQLAlchemyError as e:
            logger.error(
                f"Error checking existence of {self.model.__name__} {entity_id}: {e}")
            raise RepositoryError(
                f"Failed to check {self.model.__name__} existence") from e

    async def find_all_by(self, **filters: Any) -> list[ModelType]:
        """
        Return all rows whose columns equal the given values, ordered by id.

        Raises:
            RepositoryError: If a filter names an attribute the model lacks, or the query fails.
        """
        unknown = [f for f in filters if not hasattr(self.model, f)]
        if unknown:
            raise RepositoryError(
                f"{self.model.__name__} has no field(s): {', '.join(sorted(unknown))}",
                fields=sorted(unknown))

        # every filtered column is an INTEGER key; an out-of-range value matches nothing
        if any(isinstance(v, int) and not fits_integer_column(v) for v in filters.values()):
            return []

        try:
            query = select(self.model)
            for field, value in filters.items():
                query = query.where(getattr(self.model, field) == value)
            query = query.order_by(self.model.id)

            result = await self.db.execute(query)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(
                f"Error filtering {self.model.__name__} by {sorted(filters)}: {e}")
            raise RepositoryError(
                f"Failed to retrieve {self.model.__name__} entities") from e

    # =================================================================================================================
    # Mutations (return a success flag)
    # =================================================================================================================

    async def add(self, entity: ModelType) -> bool:
        """Insert a new entity. On success the store-assigned id is populated."""
        logger.debug(
            "repo.add.start",
            extra={"model": self.model.__name__, "operation": "add"},
        )
        self.db.add(entity)
        return await self.save("add")

    async def merge(self, entity: ModelType) -> bool:
        """
        Copy the state of a detached entity onto the stored row with the same id.

        Only attributes that are set on `entity` are copied, so a DTO-built
        instance leaves columns it does not carry (e.g. foreign keys) untouched.
        """
        try:
            await self.db.merge(entity)
        except STORE_ERRORS as e:
            return await self._fail("merge", e)
        return await self.save("merge")

    async def remove(self, entity: ModelType | None) -> bool:
        """Delete a loaded entity. A None entity is reported as a failed delete."""
        if entity is None:
            logger.warning(
                "repo.remove.missing_entity",
                extra={"model": self.model.__name__, "operation": "remove"},
            )
            return False

        try:
            await self.db.delete(entity)
        except STORE_ERRORS as e:
            return await self._fail("remove", e)
        return await self.save("remove")

    async def remove_many(self, entities: Iterable[ModelType]) -> bool:
        """
        Delete a batch of entities in one commit.

        All-or-nothing: any failure rolls the whole batch back and returns False.
        An empty batch is a successful no-op.
        """
        entities = list(entities)
        try:
            for entity in entities:
                await self.db.delete(entity)
        except STORE_ERRORS as e:
            return await self._fail("remove_many", e)

        logger.debug(
            "repo.remove_many.start",
            extra={"model": self.model.__name__, "operation": "remove_many", "count": len(entities)},
        )
        return await self.save("remove_many")

    async def save(self, operation: str = "save") -> bool:
        """
        Flush and commit pending changes.

        Returns:
            True when the commit succeeded, False when it failed (session rolled back).
        """
        start = time.perf_counter()
        try:
            await self.db.flush()
            await self.db.commit()
        except STORE_ERRORS as e:
            return await self._fail(operation, e)

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"repo.{operation}.success",
            extra={
                "model": self.model.__name__,
                "operation": operation,
                "duration_ms": duration_ms,
            },
        )
        return True

    async def _fail(self, operation: str, exc: Exception) -> bool:
        try:
            await self.db.rollback()
        except SQLAlchemyError:
            logger.exception(
                "Failed to rollback session after store error", extra={"model": self.model.__name__})

        logger.warning(
            f"repo.{operation}.failed",
            extra={"model": self.model.__name__, "operation": operation, **describe_db_failure(exc)},
        )
        # raw driver text only at DEBUG
        logger.debug(f"repo.{operation}.failed.raw", extra={"raw": str(exc)})
        return False
