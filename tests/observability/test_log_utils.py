"""
Test suite for structured logging helpers.

System role: Verification of safe log context conversion
"""

import logging

import pytest

from ragchat.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)


class TestSafeLogValue:
    """Test suite for safe_log_value."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "None"),
            ("plain", "plain"),
            ([1, 2, 3], "list(3 items)"),
            ({"a": 1}, "dict(1 keys)"),
            (42, "42"),
        ],
    )
    def test_converts_values(self, value, expected) -> None:
        assert safe_log_value(value) == expected

    def test_truncates_long_strings(self) -> None:
        result = safe_log_value("x" * 20, max_length=5)
        assert result == "xxxxx... (truncated, 20 total)"


class TestLogHelpers:
    """Test suite for log_with_context and log_exception_with_context."""

    def test_context_is_attached_to_record(self, caplog) -> None:
        logger = logging.getLogger("ragchat.tests.logging")

        with caplog.at_level(logging.INFO, logger="ragchat.tests.logging"):
            log_with_context(logger, logging.INFO, "indexed", chunks=3)

        assert caplog.records[0].chunks == "3"

    def test_exception_fields_are_attached(self, caplog) -> None:
        logger = logging.getLogger("ragchat.tests.logging")

        with caplog.at_level(logging.WARNING, logger="ragchat.tests.logging"):
            log_exception_with_context(
                logger,
                "retrieval failed",
                TimeoutError("search timed out"),
                level=logging.WARNING,
                session_id="abc",
            )

        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert record.error_type == "TimeoutError"
        assert record.error_msg == "search timed out"
        assert record.session_id == "abc"
