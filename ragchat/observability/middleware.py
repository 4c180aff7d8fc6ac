"""
FastAPI middleware for observability.

Correlation context and request logging middleware.

Dependencies: fastapi, starlette, ragchat.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ragchat.observability.correlation import (
    clear_request_context,
    set_correlation_id,
    set_user_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
USER_HEADER = "X-User-Id"


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID and caller ID injection."""

    async def dispatch(self, request: Request, call_next):
        """
        Put the request's correlation and user IDs into the log context.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response with correlation ID header
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        set_user_id(request.headers.get(USER_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_request_context()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(self, request: Request, call_next):
        """
        Log HTTP request and response with timing.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response object
        """
        start_time = time.time()
        method = request.method
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - Exception",
                extra={
                    "method": method,
                    "path": path,
                    "process_time_ms": round((time.time() - start_time) * 1000, 2),
                    "error_type": type(e).__name__,
                    "error_msg": str(e),
                },
            )
            raise

        logger.info(
            f"{method} {path} - {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "process_time_ms": round((time.time() - start_time) * 1000, 2),
            },
        )
        return response
