# src/pokemon_review/api/v1/error_handlers.py
"""
FastAPI exception handlers that map application exceptions to HTTP responses.

Handlers raise `pokemon_review.exceptions.base.*` errors; the mapping to a
status and a JSON body lives on the exception classes (`http_status()`,
`to_payload()`), so the handlers here stay tiny.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from pokemon_review.exceptions.base import AppError, BadRequestError
from .validation import ValidationResult

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Any AppError -> its mapped status.
    Payload: exc.to_payload() -> {"detail": "...", "code": "...", "errors": {...}}
    """
    status = exc.http_status()
    log = logger.warning if status >= 500 else logger.info
    log(
        "%s for %s %s: %s", type(exc).__name__, request.method, request.url.path, exc,
        extra={"status_code": status, "error_code": exc.error_code},
    )
    return JSONResponse(status_code=status, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed body, query or path values -> 400 with per-field messages.
    """
    result = ValidationResult.from_pydantic_errors(exc.errors())
    error = BadRequestError("Invalid request", errors=result.errors)
    logger.info(
        "Request validation failed for %s %s", request.method, request.url.path,
        extra={"errors": result.errors},
    )
    return JSONResponse(status_code=error.http_status(), content=error.to_payload())


# Call this from the app factory
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
