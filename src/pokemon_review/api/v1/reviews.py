"""
Review endpoints, including the batch delete of everything a reviewer wrote.
"""

import logging

from fastapi import APIRouter, Body, Depends, Query, Response, status

from pokemon_review.core.dependencies import (
    get_pokemon_repository,
    get_review_repository,
    get_reviewer_repository,
)
from pokemon_review.exceptions.base import (
    AlreadyExistsError,
    BadRequestError,
    NotFoundError,
    PersistenceError,
)
from pokemon_review.mapping import to_dto, to_dtos, to_entity
from pokemon_review.models.review import Review
from pokemon_review.repositories import PokemonRepository, ReviewerRepository, ReviewRepository
from pokemon_review.schemas import ReviewDto
from pokemon_review.validators import comparison_key
from .validation import ValidationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewDto])
async def get_reviews(repo: ReviewRepository = Depends(get_review_repository)):
    reviews = await repo.get_reviews()
    return to_dtos(reviews, ReviewDto)


@router.get("/pokemon/{pokemon_id}", response_model=list[ReviewDto])
async def get_reviews_for_pokemon(pokemon_id: int, repo: ReviewRepository = Depends(get_review_repository)):
    reviews = await repo.get_reviews_of_pokemon(pokemon_id)
    return to_dtos(reviews, ReviewDto)


@router.get("/{review_id}", response_model=ReviewDto)
async def get_review(review_id: int, repo: ReviewRepository = Depends(get_review_repository)):
    if not await repo.review_exists(review_id):
        raise NotFoundError(f"Review {review_id} not found")

    review = await repo.get_review(review_id)
    return to_dto(review, ReviewDto)


@router.post("", status_code=status.HTTP_200_OK)
async def create_review(
    reviewer_id: int = Query(...),
    pokemon_id: int = Query(...),
    payload: ReviewDto | None = Body(default=None),
    repo: ReviewRepository = Depends(get_review_repository),
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
):
    """
    Create a review written by `reviewer_id` about `pokemon_id`.

    Titles are compared trimmed and case-insensitively against every review.
    The reviewer and pokemon ids are not checked up front: if either lookup
    misses, the insert violates the NOT NULL reference and the store reports
    failure (500).
    """
    result = ValidationResult()

    if payload is None:
        result.add_error("", "Request body is required")
        raise BadRequestError("Request body is required", errors=result.errors)

    key = comparison_key(payload.title)
    existing = await repo.get_reviews()
    if any(comparison_key(r.title) == key for r in existing):
        logger.info("review.create.duplicate", extra={"title": payload.title})
        result.add_error("", "Review already exists")
        raise AlreadyExistsError("Review already exists", fields=["title"], errors=result.errors)

    # both lookups run before the new entity is wired to either
    reviewer = await reviewer_repo.get_reviewer(reviewer_id)
    pokemon = await pokemon_repo.get_pokemon(pokemon_id)

    review = to_entity(payload, Review, exclude={"id"})
    review.reviewer = reviewer
    review.pokemon = pokemon

    if not await repo.create_review(review):
        logger.warning(
            "review.create.failed",
            extra={"reviewer_id": reviewer_id, "pokemon_id": pokemon_id},
        )
        result.add_error("", "Something went wrong while saving")
        raise PersistenceError("Something went wrong while saving", errors=result.errors)

    logger.info("review.create.success", extra={"review_id": review.id})
    return "Successfully created"


@router.put("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_review(
    review_id: int,
    payload: ReviewDto | None = Body(default=None),
    repo: ReviewRepository = Depends(get_review_repository),
):
    """Overwrite a review's title, text and rating. Its reviewer and pokemon are kept."""
    result = ValidationResult()

    if payload is None:
        result.add_error("", "Request body is required")
        raise BadRequestError("Request body is required", errors=result.errors)

    if payload.id != review_id:
        result.add_error("id", "Path id does not match body id")
        raise BadRequestError("Path id does not match body id", fields=["id"], errors=result.errors)

    if not await repo.review_exists(review_id):
        raise NotFoundError(f"Review {review_id} not found")

    review = to_entity(payload, Review)

    if not await repo.update_review(review):
        result.add_error("", "Something went wrong updating review")
        raise PersistenceError("Something went wrong updating review", errors=result.errors)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/by-reviewer/{reviewer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reviews_by_reviewer(
    reviewer_id: int,
    repo: ReviewRepository = Depends(get_review_repository),
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    """
    Delete every review written by a reviewer, all or nothing.

    A reviewer with no reviews is a successful no-op.
    """
    if not await reviewer_repo.reviewer_exists(reviewer_id):
        raise NotFoundError(f"Reviewer {reviewer_id} not found")

    reviews = await reviewer_repo.get_reviews_by_reviewer(reviewer_id)

    if not await repo.delete_reviews(reviews):
        result = ValidationResult()
        result.add_error("", "error deleting reviews")
        raise PersistenceError("error deleting reviews", errors=result.errors)

    logger.info("review.delete_by_reviewer.success", extra={"reviewer_id": reviewer_id, "count": len(reviews)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: int,
    repo: ReviewRepository = Depends(get_review_repository),
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    """
    Delete a review.

    The existence check runs against reviewer ids, so a review id with no
    matching reviewer is reported as 404 even when the review exists. A failed
    delete is recorded and logged but still answered with 204.
    """
    result = ValidationResult()

    if not await reviewer_repo.reviewer_exists(review_id):
        raise NotFoundError(f"Reviewer {review_id} not found")

    review = await repo.get_review(review_id)

    if not await repo.delete_review(review):
        result.add_error("", "Something went wrong deleting review")
        logger.warning(
            "review.delete.failed",
            extra={"review_id": review_id, "errors": result.errors},
        )
    else:
        logger.info("review.delete.success", extra={"review_id": review_id})

    return Response(status_code=status.HTTP_204_NO_CONTENT)
