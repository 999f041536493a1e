"""
Repository layer: one facade per entity family over the async SQLAlchemy session.

Usage:
    from pokemon_review.repositories import CategoryRepository, ReviewRepository
"""

from .base_repository import BaseRepository
from .category_repository import CategoryRepository
from .review_repository import ReviewRepository
from .reviewer_repository import ReviewerRepository
from .pokemon_repository import PokemonRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "ReviewRepository",
    "ReviewerRepository",
    "PokemonRepository"
]
