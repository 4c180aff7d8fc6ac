"""
Exception handlers for the API.

Translates the application exception hierarchy into HTTP status codes
and ErrorResponse bodies:
- NotFoundError -> 404
- ValidationError -> 400
- StorageError and any other RagChatException -> 500
- anything else -> 500 with a generic message

Dependencies: fastapi, ragchat.core.exceptions
System role: Uniform HTTP error mapping
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ragchat.core.exceptions import NotFoundError, RagChatException, ValidationError
from ragchat.models.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning(
        "Resource not found",
        extra={"path": request.url.path, "error": exc.message},
    )
    return _error_response(status.HTTP_404_NOT_FOUND, exc.message, exc.details)


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(
        "Invalid request",
        extra={"path": request.url.path, "error": exc.message},
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.details)


async def application_error_handler(request: Request, exc: RagChatException) -> JSONResponse:
    logger.error(
        "Request failed",
        extra={"path": request.url.path, "error": str(exc)},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers to an application."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_handler)
    app.add_exception_handler(RagChatException, application_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
