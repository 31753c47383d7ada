"""Tests for settings and logging setup."""

import logging

import pytest

from data_assistant.config import Settings, get_settings
from data_assistant.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GOOGLE_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY",
        "LLM_PROVIDER", "LLM_MODEL", "DATA_ASSISTANT_LOG_LEVEL",
        "MAX_AGENT_ROUNDS", "CATEGORIZATION_BATCH_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.max_agent_rounds == 10
    assert settings.categorization_batch_size == 100
    assert settings.log_level == "WARNING"
    assert settings.detect_provider() is None


def test_gemini_key_counts_as_google(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("OPENAI_API_KEY", "o-key")
    settings = Settings(_env_file=None)
    assert settings.detect_provider() == "google"
    assert settings.get_api_key_for_provider("google") == "g-key"
    assert settings.get_api_key_for_provider("openai") == "o-key"
    assert settings.get_api_key_for_provider("together") is None


def test_explicit_provider_wins(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    assert Settings(_env_file=None).detect_provider() == "openai"


def test_limits_validated(monkeypatch):
    monkeypatch.setenv("MAX_AGENT_ROUNDS", "0")
    with pytest.raises(ValueError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_setup_logging_level(monkeypatch):
    logger = setup_logging("debug")
    assert logger.name == "data_assistant"
    assert logger.level == logging.DEBUG

    monkeypatch.setenv("DATA_ASSISTANT_LOG_LEVEL", "ERROR")
    assert setup_logging().level == logging.ERROR


def test_setup_logging_invalid_level():
    assert setup_logging("LOUD").level == logging.WARNING


def test_module_loggers_are_children():
    setup_logging()
    assert get_logger("data_assistant.agent").parent.name == "data_assistant"
