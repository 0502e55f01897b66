import pytest
from pydantic import ValidationError

from booking_engine.core.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("BOOKING_ENGINE_MAX_SERIES_OCCURRENCES", raising=False)
    settings = Settings(_env_file=None)

    assert settings.MAX_SERIES_OCCURRENCES == 50
    assert settings.DEFAULT_CONFLICT_POLICY == "block"
    assert settings.BUSINESS_TIMEZONE == "Asia/Bangkok"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("BOOKING_ENGINE_MAX_SERIES_OCCURRENCES", "12")
    monkeypatch.setenv("BOOKING_ENGINE_DEFAULT_CONFLICT_POLICY", "warn")

    settings = Settings(_env_file=None)

    assert settings.MAX_SERIES_OCCURRENCES == 12
    assert settings.DEFAULT_CONFLICT_POLICY == "warn"


def test_invalid_values_rejected(monkeypatch):
    monkeypatch.setenv("BOOKING_ENGINE_MAX_SERIES_OCCURRENCES", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
