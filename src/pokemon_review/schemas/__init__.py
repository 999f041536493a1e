from .dtos import BaseDto, CategoryDto, PokemonDto, ReviewerDto, ReviewDto

__all__ = ["BaseDto", "CategoryDto", "PokemonDto", "ReviewerDto", "ReviewDto"]
