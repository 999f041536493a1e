"""
Project metadata lookups used to stamp log records with service name and version.

Values come from the installed distribution when available, otherwise from the
nearest pyproject.toml above this package.
"""

from pathlib import Path
from importlib import metadata as importlib_metadata
from typing import Any
import tomllib


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


def get_pyproject_value(
    key: str,
    start: str | Path | None = None,
    max_up: int = 5,
    default: Any = None,
) -> Any:
    """
    Return the value for dot-separated `key` (e.g. "project.version") from the
    nearest pyproject.toml, or `default` if the file or key is missing or the
    file cannot be parsed.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent

    pyproject = find_pyproject(start=start_path, max_up=max_up)
    if not pyproject or not key:
        return default

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    cur = data
    for part in key.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        else:
            return default
    return cur


def get_project_name(default: str | None = "pokemon-review-api") -> str | None:
    return get_pyproject_value("project.name", default=default)


def get_project_version(default: str = "unknown") -> str:
    """
    Installed distribution version first, then project.version from pyproject.toml.
    """
    name = get_project_name(default=None)
    if name:
        try:
            return importlib_metadata.version(name)
        except importlib_metadata.PackageNotFoundError:
            pass

    val = get_pyproject_value("project.version", default=None)
    return val if val is not None else default


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
