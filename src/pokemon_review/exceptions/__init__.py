
# pokemon_review/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py          # App-level errors (NotFoundError, AlreadyExistsError, ...)
# │   └── integrity.py     # Classify SQL-level failures for repository logs

from .base import (
    AppError,
    BadRequestError,
    NotFoundError,
    AlreadyExistsError,
    PersistenceError,
    RepositoryError,
)
from .integrity import ConstraintKind, classify_integrity_error, describe_db_failure

__all__ = [
    "AppError",
    "BadRequestError",
    "NotFoundError",
    "AlreadyExistsError",
    "PersistenceError",
    "RepositoryError",
    "ConstraintKind",
    "classify_integrity_error",
    "describe_db_failure",
]
