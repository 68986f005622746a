"""Tests for request-scoped logging context."""

import json
import logging

from roto.logging_config import (
    ContextualFormatter,
    LoggingContext,
    StructuredJsonFormatter,
    device_id_ctx,
    request_id_ctx,
)


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("roto.test", logging.INFO, __file__, 1, message, None, None)


class TestLoggingContext:
    """Tests for scoping request and device ids."""

    def test_context_is_reset_on_exit(self):
        with LoggingContext(request_id="req-12345678", device_id="dev-12345678"):
            assert request_id_ctx.get() == "req-12345678"
            assert device_id_ctx.get() == "dev-12345678"

        assert request_id_ctx.get() is None
        assert device_id_ctx.get() is None

    def test_nested_context_restores_outer_values(self):
        with LoggingContext(request_id="outer-request", device_id="outer-device"):
            with LoggingContext(request_id="inner-request"):
                assert request_id_ctx.get() == "inner-request"
                assert device_id_ctx.get() == "outer-device"

            assert request_id_ctx.get() == "outer-request"


class TestFormatters:
    """Tests for context fields in formatted lines."""

    def test_json_formatter_includes_context(self):
        with LoggingContext(request_id="req-1", device_id="dev-1"):
            data = json.loads(StructuredJsonFormatter().format(_record()))

        assert data["message"] == "hello"
        assert data["request_id"] == "req-1"
        assert data["device_id"] == "dev-1"

    def test_json_formatter_omits_missing_context(self):
        data = json.loads(StructuredJsonFormatter().format(_record()))

        assert "request_id" not in data
        assert "device_id" not in data

    def test_contextual_formatter_shortens_ids(self):
        with LoggingContext(request_id="abcdef0123456789"):
            line = ContextualFormatter().format(_record())

        assert "[req=abcdef01]" in line
        assert line.endswith("| hello")
