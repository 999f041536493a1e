r"""
Single import point for the ORM models.

Importing this package registers every table on `Base.metadata`, which is what
`create_all()` and the test fixtures rely on.

    from pokemon_review.models import Category, Pokemon, PokemonCategory, Review, Reviewer
"""

from .category import Category
from .pokemon import Pokemon, PokemonCategory
from .reviewer import Reviewer
from .review import Review

__all__ = [
    "Category",
    "Pokemon",
    "PokemonCategory",
    "Reviewer",
    "Review"
]
