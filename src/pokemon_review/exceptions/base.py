"""
Application-level exceptions shared by repositories and request handlers.

Every error carries a canonical `error_code`; `http_status()` turns that code
into a status and `to_payload()` into the JSON body returned to clients.
"""

from typing import Iterable, Mapping


class AppError(Exception):
    """
    Base exception for handler and repository errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['name'])
    - error_code: canonical short code (e.g., 'not_found', 'already_exists')
    - errors: optional per-key messages collected in a ValidationResult
    """

    # canonical error_code -> HTTP status
    ERROR_CODE_TO_STATUS = {
        "bad_request": 400,
        "not_found": 404,
        "already_exists": 422,
        "persistence_failure": 500,
    }

    default_code: str | None = None

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None,
                 errors: Mapping[str, list[str]] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code or self.default_code
        self.errors = {k: list(v) for k, v in errors.items()} if errors else None

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

            {
                "detail": "Category already exists",
                "code": "already_exists",
                "fields": ["name"],                   # optional
                "errors": {"": ["Category already exists"]}   # optional
            }
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        if self.errors:
            payload["errors"] = {k: list(v) for k, v in self.errors.items()}
        return payload

    def http_status(self) -> int:
        """
        HTTP status for this error, looked up from `error_code`; 400 when unknown.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class BadRequestError(AppError):
    """Absent or malformed payload, or a path/body id mismatch."""
    default_code = "bad_request"


class NotFoundError(AppError):
    default_code = "not_found"

    def __init__(self, message: str = "Not found", **kwargs):
        super().__init__(message, **kwargs)


class AlreadyExistsError(AppError):
    """Semantic duplicate found by a handler-level check before a create."""
    default_code = "already_exists"


class PersistenceError(AppError):
    """A repository mutation reported failure."""
    default_code = "persistence_failure"


class RepositoryError(AppError):
    """A store read or query failed; surfaced as a server error."""
    default_code = "persistence_failure"


__all__ = [
    "AppError",
    "BadRequestError",
    "NotFoundError",
    "AlreadyExistsError",
    "PersistenceError",
    "RepositoryError",
]
