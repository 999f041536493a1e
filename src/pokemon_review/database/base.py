"""
Declarative base shared by every ORM model in `pokemon_review.models`.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

# Range of the INTEGER columns used for ids, foreign keys and ratings
INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


def fits_integer_column(value) -> bool:
    """True when `value` can be bound to an INTEGER column on every supported backend."""
    return isinstance(value, int) and INT32_MIN <= value <= INT32_MAX
