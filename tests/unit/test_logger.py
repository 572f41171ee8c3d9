"""
Name: Structured Logging Tests

Responsibilities:
  - JSON output with request context
  - Redaction of sensitive extra fields
"""

from __future__ import annotations

import json
import logging

import pytest

from notaria.context import clear_context, set_request_context, set_user_context
from notaria.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("notaria.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_request_context():
    set_request_context(request_id="req-1", method="GET", path="/api/processes")
    set_user_context("user-1")
    try:
        payload = json.loads(JSONFormatter().format(_record("hola")))
    finally:
        clear_context()

    assert payload["message"] == "hola"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["method"] == "GET"
    assert payload["user_id"] == "user-1"


def test_json_formatter_redacts_sensitive_fields():
    record = _record(
        "login",
        password="secret1",
        token="eyJ...",
        payload={"authorization": "Bearer x", "email": "alice@example.com"},
    )

    payload = json.loads(JSONFormatter().format(record))

    assert payload["password"] == "***REDACTADO***"
    assert payload["token"] == "***REDACTADO***"
    assert payload["payload"]["authorization"] == "***REDACTADO***"
    assert payload["payload"]["email"] == "alice@example.com"


def test_context_is_cleared():
    set_request_context(request_id="req-2", method="POST", path="/x")
    clear_context()

    payload = json.loads(JSONFormatter().format(_record("fuera de request")))

    assert "request_id" not in payload
