import json
import logging

from weather_chat.domain.exceptions import NetworkError
from weather_chat.infrastructure.logging.logger import REDACT_LIMIT, JsonFormatter


def _record(message, extra):
    record = logging.LogRecord("weather_chat", logging.INFO, __file__, 1, message, None, None)
    record.extra = extra
    return record


def test_json_formatter_flattens_extra(monkeypatch):
    class SettingsStub:
        log_redact_content = False

    monkeypatch.setattr("weather_chat.infrastructure.logging.logger.settings", SettingsStub())
    line = JsonFormatter().format(_record("Detected intent", {"intent": "city_query", "city": "Hyderabad"}))
    payload = json.loads(line)
    assert payload["msg"] == "Detected intent"
    assert payload["level"] == "INFO"
    assert payload["intent"] == "city_query"
    assert payload["city"] == "Hyderabad"


def test_json_formatter_redacts_extra(monkeypatch):
    class SettingsStub:
        log_redact_content = True

    monkeypatch.setattr("weather_chat.infrastructure.logging.logger.settings", SettingsStub())
    extra = {"city": "Hyderabad", "error": "x" * 100, "intent": "recommend"}
    payload = json.loads(JsonFormatter().format(_record("m" * 100, extra)))
    assert payload["city"] == "H***"
    assert payload["error"] == "x" * REDACT_LIMIT + "…"
    assert payload["intent"] == "recommend"
    assert len(payload["msg"]) == REDACT_LIMIT
    # 原始字段不被修改
    assert extra["city"] == "Hyderabad"


def test_business_error_log_fields():
    err = NetworkError(code="NETWORK_ERROR", message="connection refused", provider="openweather")
    assert err.to_log_fields() == {
        "error_code": "NETWORK_ERROR",
        "error": "connection refused",
        "http_status": 400,
        "provider": "openweather",
    }
