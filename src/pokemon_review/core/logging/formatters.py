"""
Custom logging formatters.

  - JsonFormatter: one JSON object per line for log collectors. Includes the
    service, env, version and request_id, plus any `extra` keys passed at the
    call site (non-serializable values are stringified).
  - ColorFormatter: compact ANSI-colored lines for a developer terminal.

The builder picks between them from `settings.LOG_FORMAT`.
"""

import json
import logging
from typing import Any
from logging import LogRecord
from pokemon_review.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# LogRecord attributes that are never treated as `extra` keys
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "request_id"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Args:
        env: environment name (e.g. "production")
        service: logical service name included on every line
        datefmt: passed through to logging.Formatter.formatTime
    """

    def __init__(self, *, env: str | None = None, service: str = "pokemon-review-api", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED or key in log_record or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        # must never raise from the logging path
        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development formatter: TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE,
    with the level colored and any traceback appended on the next lines.
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",        # cyan
        "INFO": "\033[32m",         # green
        "WARNING": "\033[33m",      # yellow
        "ERROR": "\033[31m",        # red
        "CRITICAL": "\033[1;41m",   # bold on red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        line = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<40} | "
            f"{getattr(record, 'request_id', '-'):<36} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            line = line + "\n" + self.formatException(record.exc_info)

        return line
