"""
Transport (DTO) shapes exchanged at the API boundary.

All DTOs read from ORM instances (`from_attributes=True`) so the mapping layer
can build them straight from repository results. `id` is optional because a
create payload does not carry one.
"""

from datetime import date
from pydantic import BaseModel, ConfigDict, Field

from pokemon_review.database.base import INT32_MIN, INT32_MAX


class BaseDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CategoryDto(BaseDto):
    id: int | None = None
    name: str


class PokemonDto(BaseDto):
    id: int | None = None
    name: str
    birth_date: date | None = None


class ReviewerDto(BaseDto):
    id: int | None = None
    name: str


class ReviewDto(BaseDto):
    id: int | None = None
    title: str
    text: str
    # stored in an INTEGER column
    rating: int = Field(ge=INT32_MIN, le=INT32_MAX)
