"""Tests for observability utilities."""

import json
import logging
from datetime import date

from hotelres.observability.correlation import (
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from hotelres.observability.logging import JsonFormatter, get_logger
from hotelres.observability.redaction import (
    redact_string,
    redact_value,
    safe_log_context,
)


class TestRedaction:
    def test_redact_phone_number(self):
        result = redact_string("Call me at +1 (555) 123-4567")
        assert "123-4567" not in result
        assert "[REDACTED]" in result

    def test_redact_email(self):
        result = redact_string("Email: ada@example.com")
        assert "ada@example.com" not in result
        assert "[REDACTED]" in result

    def test_redact_value_dict_only_keys(self):
        result = redact_value({"email": "ada@example.com", "room": "Suite"})
        assert "ada@example.com" not in result
        assert "Suite" not in result
        assert "email" in result

    def test_redact_value_list_only_len(self):
        assert redact_value(["a", "b", "c"]) == "list(len=3)"

    def test_redact_value_date(self):
        assert redact_value(date(2025, 6, 1)) == "2025-06-01"

    def test_safe_log_context_drops_guest_pii(self):
        ctx = safe_log_context(
            email="ada@example.com",
            full_name="Ada Lovelace",
            special_requests=None,
            reservation_id=42,
        )
        assert ctx["email"] == "[REDACTED]"
        assert ctx["full_name"] == "[REDACTED]"
        assert ctx["special_requests"] == "null"
        assert ctx["reservation_id"] == "42"


class TestJsonFormatter:
    def _record(self, **extra):
        record = logging.LogRecord("hotelres.test", logging.INFO, __file__, 1, "reservation created", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_includes_extra_fields_and_correlation_id(self):
        token = set_correlation_id("cid-1")
        try:
            line = JsonFormatter().format(self._record(extra_fields={"reservation_id": "42"}))
        finally:
            reset_correlation_id(token)

        payload = json.loads(line)
        assert payload["message"] == "reservation created"
        assert payload["level"] == "INFO"
        assert payload["correlationId"] == "cid-1"
        assert payload["reservation_id"] == "42"

    def test_no_correlation_id_outside_request(self):
        payload = json.loads(JsonFormatter().format(self._record()))
        assert "correlationId" not in payload


class TestGetLogger:
    def test_single_handler(self):
        first = get_logger("hotelres.test.single")
        second = get_logger("hotelres.test.single")
        assert first is second
        assert len(second.handlers) == 1
        assert second.propagate is False

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert get_logger("hotelres.test.level").level == logging.WARNING


class TestResolveCorrelationId:
    def test_keeps_usable_incoming(self):
        assert resolve_correlation_id(" abc ") == "abc"

    def test_generates_when_missing(self):
        assert len(resolve_correlation_id(None)) == 36
        assert len(resolve_correlation_id("   ")) == 36
