"""
Test suite for logging helpers and correlation tracking.

System role: Verification of observability utilities
"""

import logging

import pytest

from legal_search.core.exceptions import ExpansionError
from legal_search.observability import configure_logging, get_correlation_id, set_correlation_id
from legal_search.observability.correlation import clear_correlation_id
from legal_search.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from legal_search.observability.logger import CorrelationIdFilter


class TestSafeLogValue:
    """Test suite for safe_log_value."""

    def test_vectors_should_be_summarized(self) -> None:
        """Test long sequences are logged by size only."""
        assert safe_log_value([0.1] * 1024) == "list(1024 items)"
        assert safe_log_value({"a": 1, "b": 2}) == "dict(2 keys)"

    def test_long_strings_should_be_truncated(self) -> None:
        """Test strings over the limit are cut with a marker."""
        value = safe_log_value("x" * 20, max_length=5)

        assert value == "xxxxx... (truncated, 20 total)"

    def test_none_should_render(self) -> None:
        assert safe_log_value(None) == "None"


class TestContextLogging:
    """Test suite for structured context logging."""

    def test_log_with_context_should_attach_extras(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test context keys end up on the log record."""
        logger = logging.getLogger("legal_search.test")

        with caplog.at_level(logging.INFO, logger="legal_search.test"):
            log_with_context(logger, logging.INFO, "pipeline done", corpus="primary", chunks=[1, 2])

        record = caplog.records[-1]
        assert record.corpus == "primary"
        assert record.chunks == "list(2 items)"

    def test_exception_details_should_be_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test domain exception details are flattened into error_* keys."""
        logger = logging.getLogger("legal_search.test")
        exc = ExpansionError("scroll failed", collection="tjsc-voyage-512-chunks")

        log_exception_with_context(logger, "pipeline failed", exc, corpus="primary")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_type == "ExpansionError"
        assert record.error_collection == "tjsc-voyage-512-chunks"
        assert record.corpus == "primary"
        assert record.exc_info[1] is exc


class TestCorrelation:
    """Test suite for correlation id propagation."""

    def test_set_should_generate_id_when_missing(self) -> None:
        correlation_id = set_correlation_id()
        try:
            assert correlation_id
            assert get_correlation_id() == correlation_id
        finally:
            clear_correlation_id()

    def test_malformed_header_value_should_be_replaced(self) -> None:
        """Test IDs with unsafe characters are swapped for a fresh UUID."""
        correlation_id = set_correlation_id("bad id\nINJECTED")
        try:
            assert correlation_id != "bad id\nINJECTED"
            assert len(correlation_id) == 36
        finally:
            clear_correlation_id()

    def test_filter_should_stamp_records(self) -> None:
        """Test records carry the current id, or '-' outside a request."""
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"

        set_correlation_id("req-7")
        try:
            CorrelationIdFilter().filter(record)
            assert record.correlation_id == "req-7"
        finally:
            clear_correlation_id()

    def test_configure_logging_should_quiet_http_clients(self) -> None:
        root = logging.getLogger()
        previous_handlers, previous_level = root.handlers[:], root.level
        try:
            configure_logging("debug")

            assert root.level == logging.DEBUG
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in previous_handlers:
                root.addHandler(handler)
            root.setLevel(previous_level)
