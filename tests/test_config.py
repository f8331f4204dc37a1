import pytest
from pydantic import ValidationError

from finance_tracker import config
from finance_tracker.config import Settings


def test_defaults_leave_oracle_unconfigured():
    s = Settings()
    assert s.oracle_configured is False
    assert s.OPENAI_MODEL == "gpt-3.5-turbo"
    assert s.OPENAI_BASE_URL == "https://api.openai.com/v1"


def test_key_enables_oracle():
    assert Settings(OPENAI_API_KEY="sk-abc").oracle_configured is True


def test_settings_are_frozen():
    s = Settings()
    with pytest.raises(ValidationError):
        s.OPENAI_API_KEY = "sk-late"


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("OPENAI_TIMEOUT_S", "5")
    config.get_settings.cache_clear()
    try:
        s = config.get_settings()
        assert s.oracle_configured
        assert s.OPENAI_MODEL == "gpt-4o-mini"
        assert s.OPENAI_TIMEOUT_S == 5.0
    finally:
        config.get_settings.cache_clear()


def test_blank_timeout_uses_default(monkeypatch):
    monkeypatch.setenv("OPENAI_TIMEOUT_S", "  ")
    config.get_settings.cache_clear()
    try:
        assert config.get_settings().OPENAI_TIMEOUT_S == 30.0
    finally:
        config.get_settings.cache_clear()


def test_non_numeric_timeout_uses_default(monkeypatch):
    monkeypatch.setenv("OPENAI_TIMEOUT_S", "thirty")
    config.get_settings.cache_clear()
    try:
        assert config.get_settings().OPENAI_TIMEOUT_S == 30.0
    finally:
        config.get_settings.cache_clear()


def test_unused_environment_flags_are_not_settings():
    assert set(Settings.model_fields) == {
        "OPENAI_API_KEY",
        "OPENAI_MODEL",
        "OPENAI_BASE_URL",
        "OPENAI_TIMEOUT_S",
        "LOG_LEVEL",
    }
