"""API utilities for FastAPI route handling.

All responses share one envelope::

    {"success": bool, "message": str?, "data": ...?, "count": int?,
     "errors": [{"field": str, "message": str}]?}
"""

from __future__ import annotations

import functools
import logging
import traceback
from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import is_development
from core.exceptions import (
    DuplicateResourceException,
    PlacesException,
    ResourceNotFoundException,
    ValidationException,
    format_validation_errors,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import FastAPI

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def success_response(
    data: Any = None,
    *,
    message: str | None = None,
    count: int | None = None,
) -> dict[str, Any]:
    """Build a success envelope, omitting empty keys."""
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    if data is not None:
        body["data"] = data
    return body


def error_response(
    status_code: int,
    message: str,
    *,
    errors: list[dict[str, Any]] | None = None,
    exc: BaseException | None = None,
) -> JSONResponse:
    """Build an error envelope; stack traces only appear in development."""
    content: dict[str, Any] = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    if exc is not None and is_development():
        content["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__),
        )
    return JSONResponse(status_code=status_code, content=content)


def exception_to_response(exc: PlacesException) -> JSONResponse:
    """Map an application exception to its HTTP envelope."""
    if isinstance(exc, ValidationException):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            exc.message,
            errors=exc.errors,
        )
    if isinstance(exc, ResourceNotFoundException):
        return error_response(status.HTTP_404_NOT_FOUND, exc.message)
    if isinstance(exc, DuplicateResourceException):
        return error_response(status.HTTP_409_CONFLICT, exc.message)
    # StoreException and any other application error
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        exc.message,
        exc=exc,
    )


def api_route(logger: logging.Logger):
    """
    Decorator for FastAPI endpoints that provides standardized error handling.

    Wraps async endpoint functions with try/except to:
    - Re-raise HTTPException instances as-is
    - Map custom exceptions to error envelopes with matching status codes
    - Log and convert other exceptions to a generic 500 envelope

    Usage:
        @router.get("/api/example")
        @api_route(logger)
        async def my_endpoint():
            # ... business logic ...
            return success_response(result)
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except ValidationException as e:
                logger.warning("Validation error in %s: %s", func.__name__, e.errors)
                return exception_to_response(e)
            except ResourceNotFoundException as e:
                logger.info("Resource not found in %s: %s", func.__name__, e.message)
                return exception_to_response(e)
            except DuplicateResourceException as e:
                logger.warning(
                    "Duplicate resource in %s: %s",
                    func.__name__,
                    e.message,
                )
                return exception_to_response(e)
            except PlacesException as e:
                logger.exception(
                    "Application error in %s: %s",
                    func.__name__,
                    e.message,
                )
                return exception_to_response(e)
            except Exception as e:
                logger.exception("Unexpected error in %s", func.__name__)
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    INTERNAL_ERROR_MESSAGE,
                    exc=e,
                )

        return wrapper

    return decorator


async def _request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.warning(
        "Invalid request %s %s: %s",
        request.method,
        request.url.path,
        errors,
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid data",
        errors=errors,
    )


async def _http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route not found - {request.url.path}"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message)


async def _places_exception_handler(
    request: Request,
    exc: PlacesException,
) -> JSONResponse:
    logger.warning(
        "Unhandled %s for %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
    )
    return exception_to_response(exc)


async def _unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    logger.error(
        "Internal Server Error: Request %s %s failed: %s",
        request.method,
        request.url,
        exc,
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        exc=exc,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing exception handlers on ``app``."""
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(PlacesException, _places_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
