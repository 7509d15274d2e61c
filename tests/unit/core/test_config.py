"""Tests for configuration management."""

from __future__ import annotations

import pytest

from hop_engine.core.config import (
    EngineSettings,
    LoggingSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from hop_engine.core.exceptions import ConfigurationError


class TestEngineSettings:
    """Tests for EngineSettings configuration."""

    def test_default_values(self) -> None:
        """Test default engine settings."""
        settings = EngineSettings()

        assert settings.default_seed == "0"
        assert settings.message_log_limit == 50
        assert settings.history_limit == 50

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test engine settings read the prefixed environment."""
        monkeypatch.setenv("HOP_ENGINE_DEFAULT_SEED", "from-env")
        monkeypatch.setenv("HOP_ENGINE_MESSAGE_LOG_LIMIT", "7")

        settings = EngineSettings()

        assert settings.default_seed == "from-env"
        assert settings.message_log_limit == 7

    def test_empty_default_seed_rejected(self) -> None:
        """Test that the fallback seed can never be empty."""
        with pytest.raises(ValueError):
            EngineSettings(default_seed="")


class TestLoggingSettings:
    """Tests for LoggingSettings configuration."""

    def test_default_values(self) -> None:
        """Test default logging settings."""
        settings = LoggingSettings()

        assert settings.log_level == "INFO"
        assert settings.json_logs is False

    def test_invalid_level(self) -> None:
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValueError):
            LoggingSettings(log_level="CHATTY")


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self) -> None:
        """Test default settings initialization."""
        settings = Settings()

        assert settings.app_name == "hop-engine"
        assert settings.app_version == "0.1.0"
        assert settings.engine.default_seed == "0"
        assert settings.logging.log_level == "INFO"

    def test_nested_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test nested settings via the double-underscore delimiter."""
        monkeypatch.setenv("HOP_ENGINE_ENGINE__HISTORY_LIMIT", "3")

        settings = Settings()

        assert settings.engine.history_limit == 3

    def test_history_must_fit_message_log(self) -> None:
        """Test that an oversized history is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(engine=EngineSettings(message_log_limit=1, history_limit=50))

        assert "history_limit" in str(exc_info.value)


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_returns_cached_instance(self) -> None:
        """Test get_settings caches its result."""
        assert get_settings() is get_settings()

    def test_clear_cache_reloads(self, mock_env_vars: dict[str, str]) -> None:
        """Test that clearing the cache picks up new environment."""
        first = get_settings()
        clear_settings_cache()
        second = get_settings()

        assert first is not second
        assert second.engine.default_seed == "env-seed"
        assert second.engine.history_limit == 5
        assert second.logging.log_level == "DEBUG"

    def test_invalid_env_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that invalid environment values surface as ConfigurationError."""
        monkeypatch.setenv("HOP_ENGINE_HISTORY_LIMIT", "not-a-number")

        with pytest.raises(ConfigurationError):
            get_settings()
