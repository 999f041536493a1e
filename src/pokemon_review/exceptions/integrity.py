"""
Classification of store-level failures.

Repositories report mutations as a plain success flag, but the reason a flush
or commit failed still matters for operators. This module turns a SQLAlchemy
error into a small structured description (constraint kind, constraint name,
involved columns) that repositories attach to their log records.

Postgres errors are classified from their SQLSTATE; everything else (SQLite in
tests, for example) falls back to matching the driver message.
"""
import re
import logging
from enum import Enum

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
PGCODE_TO_KIND = {
    "23505": ConstraintKind.UNIQUE,
    "23502": ConstraintKind.NOT_NULL,
    "23503": ConstraintKind.FOREIGN_KEY,
    "23514": ConstraintKind.CHECK,
}

_MESSAGE_KEYWORDS = (
    (ConstraintKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintKind.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintKind.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintKind.CHECK, ("check constraint", "check failed")),
)


def _classify_from_postgres_diag(orig) -> tuple[ConstraintKind | None, str | None]:
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None
    constraint_name = constraint_name or getattr(orig, "constraint_name", None)

    kind = PGCODE_TO_KIND.get(pgcode)
    if kind is None:
        logger.warning(
            "Unknown Postgres integrity error code encountered",
            extra={"pgcode": pgcode, "constraint_name": constraint_name}
        )
        return ConstraintKind.UNKNOWN, constraint_name

    return kind, constraint_name


def _classify_from_message(msg: str) -> ConstraintKind:
    normalized = (msg or "").lower()
    for kind, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind

    logger.debug("Unknown integrity raw message", extra={"raw": msg})
    return ConstraintKind.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintKind, str | None]:
    """
    Classify an IntegrityError as (ConstraintKind, constraint name if the driver exposes it).
    """
    orig = exc.orig

    kind, constraint_name = _classify_from_postgres_diag(orig)
    if kind is not None:
        return kind, constraint_name

    return _classify_from_message(str(orig)), None


def extract_columns(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (Postgres, SQLite).

      - 'null value in column "title" violates not-null constraint'
      - 'DETAIL:  Key (reviewer_id)=(42) is not present in table "reviewers".'
      - 'NOT NULL constraint failed: reviews.reviewer_id'
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)

    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE)
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]

    return None


def describe_db_failure(exc: Exception) -> dict:
    """
    Return structured log context for a failed flush/commit.

    Never includes the raw driver message (it may echo row values); callers
    that need it should log `exc` at DEBUG.
    """
    if isinstance(exc, IntegrityError):
        kind, constraint_name = classify_integrity_error(exc)
        return {
            "failure": "integrity",
            "constraint_kind": kind.value,
            "constraint": constraint_name,
            "fields": extract_columns(exc),
        }

    if isinstance(exc, SQLAlchemyError):
        return {"failure": "database", "error_type": type(exc).__name__}

    return {"failure": "unexpected", "error_type": type(exc).__name__}
