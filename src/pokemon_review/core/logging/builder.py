# src/pokemon_review/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

This module:
 - builds a dictConfig-compatible mapping from Settings
 - wires the RequestIdFilter and RedactFilter onto every handler
 - routes uvicorn and sqlalchemy loggers with levels derived from settings

Configuration knobs (on Settings):
 - LOG_TO_STDOUT, LOG_DIR, LOG_FORMAT, LOG_LEVEL, ENABLE_SQL_LOGGING, ENV
"""

from pathlib import Path
import logging
import logging.config

from pokemon_review.utils.logging import get_project_name
from pokemon_review.config.settings import Settings

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (color for LOG_FORMAT=text) and "json"
      - filters: "request_id", "redact"
      - handlers: console, plus file/error_file OR error_console depending on LOG_TO_STDOUT
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name() or settings.APP_NAME,
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

    Ensures LOG_DIR exists when writing files, applies the dictConfig, then
    registers a RequestIdFilter on the root logger so records created outside
    the configured handlers still carry `request_id`.
    """
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    logging.getLogger().addFilter(RequestIdFilter())
