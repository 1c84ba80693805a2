"""Unit tests for logging formatters and the request context filter."""

import json
import logging
import sys

from feedback_app.logging_config import (
    DevelopmentFormatter,
    JSONFormatter,
    RequestContextFilter,
    request_id_var,
)


def _record(msg: str = "Stored feedback", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="feedback_app.services.feedback_engine",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test suite for production JSON logs."""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "feedback_app.services.feedback_engine"
        assert data["message"] == "Stored feedback"
        assert "timestamp" in data

    def test_correlation_and_extra_fields(self):
        """Test that context fields and extras end up in the JSON object."""
        record = _record(request_id="abc123", session_id=5, admin_id=2, client_ip="10.0.0.1")

        data = json.loads(JSONFormatter().format(record))

        assert data["request_id"] == "abc123"
        assert data["session_id"] == 5
        assert data["admin_id"] == 2
        assert data["client_ip"] == "10.0.0.1"

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in data["exception"]


class TestDevelopmentFormatter:
    """Test suite for human-readable logs."""

    def test_includes_level_and_message(self):
        output = DevelopmentFormatter().format(_record())
        assert "INFO" in output
        assert "Stored feedback" in output

    def test_includes_request_id(self):
        output = DevelopmentFormatter().format(_record(request_id="abc123"))
        assert "[request_id=abc123]" in output


class TestRequestContextFilter:
    """Test suite for request ID propagation."""

    def test_stamps_current_request_id(self):
        token = request_id_var.set("req-1")
        try:
            record = _record()
            assert RequestContextFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-1"

    def test_outside_request(self):
        record = _record()

        assert RequestContextFilter().filter(record) is True
        assert getattr(record, "request_id", None) is None
