import json
import logging

from config import Settings, get_settings
from observability import JSONFormatter


def test_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 5001
    assert settings.database_url == "mongodb://127.0.0.1:27017"
    assert settings.database_name == "boutique-jeux"
    assert settings.cors_origins == ["*"]


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    get_settings.cache_clear()
    try:
        assert get_settings().port == 8080
    finally:
        get_settings.cache_clear()


def test_json_formatter_adds_request_fields():
    record = logging.LogRecord(
        "games", logging.ERROR, __file__, 1, "Store error", None, None,
    )
    record.path = "/api/games"
    record.resource_id = "9"
    line = json.loads(JSONFormatter().format(record))
    assert line["level"] == "ERROR"
    assert line["message"] == "Store error"
    assert line["path"] == "/api/games"
    assert line["resource_id"] == "9"
    assert "method" not in line
