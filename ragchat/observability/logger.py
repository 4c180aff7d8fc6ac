"""
Logger configuration.

Provides a single stdout handler with ISO timestamps for the whole process.
Each line carries the correlation and user IDs of the request that
produced it ("-" outside a request).

Dependencies: logging (stdlib), ragchat.observability.correlation
System role: Centralized logging configuration
"""

import logging
import sys

from ragchat.observability.correlation import RequestContextFilter


def configure_logging(level: str = "INFO") -> None:
    """
    Configure Python logging with ISO timestamp and structured format.

    Args:
        level: Root log level name (DEBUG, INFO, ...)
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - "
        "[%(correlation_id)s user=%(user_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)
    handler.addFilter(RequestContextFilter())

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("faiss").setLevel(logging.WARNING)
