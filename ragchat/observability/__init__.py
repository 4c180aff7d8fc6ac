"""
Observability module.

Provides logging configuration with request context, structured logging
helpers and Prometheus counters for degraded RAG behaviour.
"""

from ragchat.observability.correlation import get_correlation_id, get_user_id
from ragchat.observability.log_utils import log_exception_with_context, log_with_context
from ragchat.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "get_user_id",
    "log_with_context",
    "log_exception_with_context",
]
