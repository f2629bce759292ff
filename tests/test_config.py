"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from crypto_signals.config import DEFAULT_PAIRS, Settings
from crypto_signals.errors import ConfigurationError


def test_defaults_match_monitored_catalog(settings: Settings) -> None:
    assert settings.monitored_pairs == DEFAULT_PAIRS
    assert settings.signal_mode == "menu"
    assert settings.exchange_id == "bitget"
    assert settings.candle_timeframe == "1h"
    assert settings.candle_limit == 24
    assert settings.llm_provider == "gemini"
    assert settings.health_port == 3000


def test_csv_and_numeric_parsing(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("MONITORED_PAIRS", " BTC/USDT, ,DOGE/USDT ")
    clean_env.setenv("CANDLE_LIMIT", "not-a-number")
    clean_env.setenv("LLM_TEMPERATURE", "0.7")
    clean_env.setenv("HEALTH_ENABLED", "off")
    clean_env.setenv("PORT", "8080")

    settings = Settings.from_env()

    assert settings.monitored_pairs == ("BTC/USDT", "DOGE/USDT")
    assert settings.candle_limit == 24
    assert settings.llm_temperature == 0.7
    assert settings.health_enabled is False
    assert settings.health_port == 8080


def test_unknown_signal_mode_falls_back_to_menu(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("SIGNAL_MODE", "BULK")
    assert Settings.from_env().signal_mode == "bulk"
    clean_env.setenv("SIGNAL_MODE", "sometimes")
    assert Settings.from_env().signal_mode == "menu"


def test_validate_passes_with_required_credentials(settings: Settings) -> None:
    settings.validate()


def test_validate_lists_every_missing_credential(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings.from_env()

    with pytest.raises(ConfigurationError) as excinfo:
        settings.validate()

    message = str(excinfo.value)
    assert "TELEGRAM_BOT_TOKEN" in message
    assert "GEMINI_API_KEY" in message


def test_generic_llm_key_satisfies_provider(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    clean_env.setenv("LLM_PROVIDER", "openai")
    clean_env.setenv("LLM_API_KEY", "generic")

    settings = Settings.from_env()

    assert settings.resolved_llm_api_key() == "generic"
    assert settings.missing_credentials() == []


def test_local_provider_needs_no_key(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    clean_env.setenv("LLM_PROVIDER", "ollama")

    assert Settings.from_env().missing_credentials() == []


def test_unknown_llm_provider_is_rejected(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    clean_env.setenv("LLM_PROVIDER", "foo")
    clean_env.setenv("LLM_API_KEY", "generic")

    with pytest.raises(ConfigurationError) as excinfo:
        Settings.from_env().validate()

    assert "Unsupported LLM_PROVIDER" in str(excinfo.value)
    assert "'foo'" in str(excinfo.value)
