"""
Per-request validation result.

Each handler invocation builds its own `ValidationResult`, records problems in
it and hands `errors` to the exception it raises (or just logs them, for the
review delete path). Nothing is shared between requests.
"""

from collections import defaultdict
from typing import Any, Iterable, Mapping


class ValidationResult:
    """Ordered collection of error messages keyed by field name ("" for whole-request errors)."""

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = defaultdict(list)

    def add_error(self, key: str, message: str) -> None:
        self._errors[key].append(message)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> dict[str, list[str]]:
        return {key: list(messages) for key, messages in self._errors.items()}

    @classmethod
    def from_pydantic_errors(cls, errors: Iterable[Mapping[str, Any]]) -> "ValidationResult":
        """
        Build a result from pydantic / FastAPI error dicts.

        The "body"/"query"/"path" location prefix is dropped, so
        `("body", "name")` is reported under "name" and a missing body under "".
        """
        result = cls()
        for err in errors:
            loc = [str(part) for part in err.get("loc", ())]
            if loc and loc[0] in ("body", "query", "path"):
                loc = loc[1:]
            result.add_error(".".join(loc), err.get("msg", "Invalid value"))
        return result

    def __repr__(self) -> str:
        return f"<ValidationResult(errors={self.errors!r})>"
