from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from pokemon_review.exceptions.integrity import (
    ConstraintKind,
    classify_integrity_error,
    describe_db_failure,
    extract_columns,
)


class FakePgError(Exception):
    """Mimics a driver exception carrying a SQLSTATE and diagnostics."""

    def __init__(self, message, pgcode, constraint_name=None):
        super().__init__(message)
        self.pgcode = pgcode
        self.diag = SimpleNamespace(constraint_name=constraint_name)


def integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO reviews ...", {}, orig)


@pytest.mark.parametrize(
    "pgcode, kind",
    [
        ("23505", ConstraintKind.UNIQUE),
        ("23502", ConstraintKind.NOT_NULL),
        ("23503", ConstraintKind.FOREIGN_KEY),
        ("23514", ConstraintKind.CHECK),
        ("23999", ConstraintKind.UNKNOWN),
    ],
)
def test_classifies_postgres_errors_by_sqlstate(pgcode, kind):
    exc = integrity_error(FakePgError("boom", pgcode, constraint_name="fk_reviews_reviewer_id_reviewers"))

    assert classify_integrity_error(exc) == (kind, "fk_reviews_reviewer_id_reviewers")


@pytest.mark.parametrize(
    "message, kind",
    [
        ("NOT NULL constraint failed: reviews.reviewer_id", ConstraintKind.NOT_NULL),
        ("UNIQUE constraint failed: categories.name", ConstraintKind.UNIQUE),
        ("FOREIGN KEY constraint failed", ConstraintKind.FOREIGN_KEY),
        ("CHECK constraint failed: rating", ConstraintKind.CHECK),
        ("something else entirely", ConstraintKind.UNKNOWN),
    ],
)
def test_classifies_by_message_without_sqlstate(message, kind):
    assert classify_integrity_error(integrity_error(Exception(message))) == (kind, None)


@pytest.mark.parametrize(
    "message, columns",
    [
        ('null value in column "title" violates not-null constraint', ["title"]),
        ('Key (reviewer_id)=(42) is not present in table "reviewers".', ["reviewer_id"]),
        ("NOT NULL constraint failed: reviews.reviewer_id", ["reviewer_id"]),
        ("UNIQUE constraint failed: pokemon_categories.pokemon_id, pokemon_categories.category_id",
         ["pokemon_id", "category_id"]),
        ("no columns here", None),
    ],
)
def test_extract_columns(message, columns):
    assert extract_columns(integrity_error(Exception(message))) == columns


def test_describe_db_failure_shapes():
    described = describe_db_failure(integrity_error(Exception("NOT NULL constraint failed: reviews.pokemon_id")))
    assert described == {
        "failure": "integrity",
        "constraint_kind": "not_null",
        "constraint": None,
        "fields": ["pokemon_id"],
    }

    operational = OperationalError("SELECT 1", {}, Exception("database is locked"))
    assert describe_db_failure(operational) == {"failure": "database", "error_type": "OperationalError"}

    assert describe_db_failure(ValueError("x")) == {"failure": "unexpected", "error_type": "ValueError"}
