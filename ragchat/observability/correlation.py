"""
Request context for log records.

Holds the correlation ID and caller user ID of the current request in
contextvars, so they follow the request across awaits and threadpool calls,
and stamps them onto every log record through a logging filter.

Dependencies: contextvars, logging
System role: Request tracing across service boundaries
"""

import logging
import uuid
from contextvars import ContextVar

NO_CONTEXT = "-"

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default=NO_CONTEXT)
user_id_ctx: ContextVar[str] = ContextVar("user_id", default=NO_CONTEXT)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        str: The correlation ID that was set
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    correlation_id_ctx.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """
    Get current correlation ID from context.

    Returns:
        str: Current correlation ID, "-" outside a request
    """
    return correlation_id_ctx.get()


def set_user_id(user_id: str | None) -> None:
    """Set the caller's user ID in context ("-" when unknown)."""
    user_id_ctx.set(user_id or NO_CONTEXT)


def get_user_id() -> str:
    return user_id_ctx.get()


def clear_request_context() -> None:
    """Clear correlation and user IDs from context."""
    correlation_id_ctx.set(NO_CONTEXT)
    user_id_ctx.set(NO_CONTEXT)


class RequestContextFilter(logging.Filter):
    """Adds correlation_id and user_id attributes to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_ctx.get()
        record.user_id = user_id_ctx.get()
        return True
