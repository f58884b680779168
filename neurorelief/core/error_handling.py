"""
Error Handling
Maps domain errors and validation failures onto the API's {"message": ...} shape

- Validation problems are reported back with a readable message (400)
- Missing records are reported as 404
- Anything unexpected is logged in full and returned as a generic 500
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, List, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from neurorelief.core.logging import log_error

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred processing your request"

# Request sections that are noise in a field path
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


class NotFoundError(Exception):
    """Referenced record is absent for the calling user"""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} not found")


class ValidationFailure(Exception):
    """Domain-level validation that can't be expressed in a schema field"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def _field_path(loc: Sequence[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts)


def format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """
    Render pydantic errors as one readable line

    Example:
        Validation error: Input should be less than or equal to 10 at "intensity"
    """
    details = []
    for error in errors:
        message = error.get("msg", "Invalid value")
        path = _field_path(error.get("loc", ()))
        details.append(f'{message} at "{path}"' if path else message)
    return "Validation error: " + "; ".join(details)


def message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return message_response(status.HTTP_400_BAD_REQUEST, format_validation_errors(exc.errors()))


async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    return message_response(status.HTTP_400_BAD_REQUEST, f"Validation error: {exc.message}")


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return message_response(status.HTTP_404_NOT_FOUND, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else GENERIC_ERROR_MESSAGE
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error_id = str(uuid.uuid4())[:8]
    log_error(
        f"Unhandled exception [{error_id}] on {request.method} {request.url.path}: "
        f"{type(exc).__name__}: {exc}",
        logger_name="error_handler",
        exc_info=True
    )
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationFailure, validation_failure_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


@contextmanager
def internal_errors(action: str):
    """
    Turn unexpected failures inside a handler into a generic 500

    Usage:
        with internal_errors("create episode"):
            ...
    Known errors (HTTP, not-found, validation) pass through untouched.
    """
    try:
        yield
    except (StarletteHTTPException, NotFoundError, ValidationFailure):
        raise
    except Exception as e:
        log_error(f"Error trying to {action}: {type(e).__name__}: {e}", logger_name="error_handler", exc_info=True)
        raise StarletteHTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to {action}")
