"""Tests for the structured JSON log formatter."""

from __future__ import annotations

import json
import logging

from sitetrack.shared.infrastructure.logging import CustomJsonFormatter, get_context_logger


def _format(record: logging.LogRecord) -> dict:
    formatter = CustomJsonFormatter(
        "%(name)s %(levelname)s %(message)s",
        static_fields={"environment": "staging"},
    )
    return json.loads(formatter.format(record))


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="sitetrack.tickets",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Ticket opened",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_output_carries_context():
    payload = _format(_record(ticket_id="t-1", correlation_id="req-42"))

    assert payload["message"] == "Ticket opened"
    assert payload["levelname"] == "INFO"
    assert payload["environment"] == "staging"
    assert payload["ticket_id"] == "t-1"
    assert payload["correlation_id"] == "req-42"
    assert payload["timestamp"]


def test_sensitive_values_are_redacted():
    payload = _format(_record(api_key="sk-123", db_password="hunter2"))

    assert payload["api_key"] == "***REDACTED***"
    assert payload["db_password"] == "***REDACTED***"


def test_context_logger_wraps_with_correlation_id():
    adapter = get_context_logger("sitetrack.tests", correlation_id="req-7")
    assert isinstance(adapter, logging.LoggerAdapter)
    assert adapter.extra == {"correlation_id": "req-7"}
    assert isinstance(get_context_logger("sitetrack.tests"), logging.Logger)
