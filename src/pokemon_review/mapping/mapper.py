"""
Bidirectional mapping between ORM entities and transport DTOs.

The mapping is field-for-field: no renaming logic beyond what the DTO
declares, and scalar fields survive a round trip unchanged.
"""

from typing import Iterable, Type, TypeVar

from pokemon_review.database.base import Base
from pokemon_review.schemas.dtos import BaseDto

DtoType = TypeVar("DtoType", bound=BaseDto)
ModelType = TypeVar("ModelType", bound=Base)


def to_dto(entity: Base, dto_cls: Type[DtoType]) -> DtoType:
    """Build a DTO from the entity's attributes (only the DTO's fields are read)."""
    return dto_cls.model_validate(entity)


def to_dtos(entities: Iterable[Base], dto_cls: Type[DtoType]) -> list[DtoType]:
    return [to_dto(entity, dto_cls) for entity in entities]


def to_entity(dto: BaseDto, model_cls: Type[ModelType], *, exclude: set[str] | None = None) -> ModelType:
    """
    Build a transient ORM instance from a DTO.

    Fields that are None on the DTO are not set on the entity, so a missing id
    stays store-assigned and a later merge leaves those columns alone. Names in
    `exclude` are dropped as well (e.g. `{"id"}` when creating).
    """
    data = dto.model_dump(exclude_none=True, exclude=exclude or None)
    return model_cls(**data)
