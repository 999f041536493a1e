"""
Category endpoints.

Every handler follows the same sequence: validate the request shape, check
existence or business rules through the repository, map between entity and
DTO, and pick the status. Failures are raised as AppError subclasses and
turned into JSON by the registered exception handlers.
"""

import logging

from fastapi import APIRouter, Body, Depends, Response, status

from pokemon_review.core.dependencies import get_category_repository
from pokemon_review.exceptions.base import (
    AlreadyExistsError,
    BadRequestError,
    NotFoundError,
    PersistenceError,
)
from pokemon_review.mapping import to_dto, to_dtos, to_entity
from pokemon_review.models.category import Category
from pokemon_review.repositories import CategoryRepository
from pokemon_review.schemas import CategoryDto, PokemonDto
from pokemon_review.validators import comparison_key
from .validation import ValidationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryDto])
async def get_categories(repo: CategoryRepository = Depends(get_category_repository)):
    categories = await repo.get_categories()
    return to_dtos(categories, CategoryDto)


@router.get("/pokemon/{category_id}", response_model=list[PokemonDto])
async def get_pokemon_by_category_id(
    category_id: int,
    repo: CategoryRepository = Depends(get_category_repository),
):
    """Pokemon in a category. An unknown category id yields an empty list."""
    pokemon = await repo.get_pokemon_by_category(category_id)
    return to_dtos(pokemon, PokemonDto)


@router.get("/{category_id}", response_model=CategoryDto)
async def get_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    if not await repo.category_exists(category_id):
        raise NotFoundError(f"Category {category_id} not found")

    category = await repo.get_category(category_id)
    return to_dto(category, CategoryDto)


@router.post("", status_code=status.HTTP_200_OK)
async def create_category(
    payload: CategoryDto | None = Body(default=None),
    repo: CategoryRepository = Depends(get_category_repository),
):
    """
    Create a category unless one with the same name already exists.

    Names are compared trimmed and case-insensitively, so "Fire " and "FIRE"
    collide. The check runs before the insert and is not atomic with it.
    """
    result = ValidationResult()

    if payload is None:
        result.add_error("", "Request body is required")
        raise BadRequestError("Request body is required", errors=result.errors)

    key = comparison_key(payload.name)
    existing = await repo.get_categories()
    if any(comparison_key(c.name) == key for c in existing):
        logger.info("category.create.duplicate", extra={"category_name": payload.name})
        result.add_error("", "Category already exists")
        raise AlreadyExistsError("Category already exists", fields=["name"], errors=result.errors)

    category = to_entity(payload, Category, exclude={"id"})

    if not await repo.create_category(category):
        result.add_error("", "Something went wrong while saving")
        raise PersistenceError("Something went wrong while saving", errors=result.errors)

    logger.info("category.create.success", extra={"category_id": category.id})
    return "Successfully created"


@router.put("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_category(
    category_id: int,
    payload: CategoryDto | None = Body(default=None),
    repo: CategoryRepository = Depends(get_category_repository),
):
    result = ValidationResult()

    if payload is None:
        result.add_error("", "Request body is required")
        raise BadRequestError("Request body is required", errors=result.errors)

    # checked before existence: a mismatch is 400 even for unknown ids
    if payload.id != category_id:
        result.add_error("id", "Path id does not match body id")
        raise BadRequestError("Path id does not match body id", fields=["id"], errors=result.errors)

    if not await repo.category_exists(category_id):
        raise NotFoundError(f"Category {category_id} not found")

    category = to_entity(payload, Category)

    if not await repo.update_category(category):
        result.add_error("", "Something went wrong updating category")
        raise PersistenceError("Something went wrong updating category", errors=result.errors)

    logger.info("category.update.success", extra={"category_id": category_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    if not await repo.category_exists(category_id):
        raise NotFoundError(f"Category {category_id} not found")

    category = await repo.get_category(category_id)

    if not await repo.delete_category(category):
        result = ValidationResult()
        result.add_error("", "Something went wrong deleting category")
        raise PersistenceError("Something went wrong deleting category", errors=result.errors)

    logger.info("category.delete.success", extra={"category_id": category_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
