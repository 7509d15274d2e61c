"""Tests for logging configuration."""

from __future__ import annotations

from collections.abc import Generator

import pytest
import structlog

from hop_engine.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults after each test."""
    yield
    clear_context()
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON mode emits one JSON object per event."""
        configure_logging(level="INFO", json_format=True)
        get_logger("test").info("Floor entered", floor=2)

        out = capsys.readouterr().out
        assert '"event": "Floor entered"' in out
        assert '"floor": 2' in out
        assert '"app": "hop_engine"' in out

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test events below the configured level are dropped."""
        configure_logging(level="WARNING", json_format=True)
        get_logger("test").info("quiet")

        assert capsys.readouterr().out == ""

    def test_from_settings(
        self,
        mock_env_vars: dict[str, str],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test the settings level is applied."""
        configure_from_settings()
        get_logger("test").debug("Enemy telegraphed")

        assert "Enemy telegraphed" in capsys.readouterr().out


class TestContext:
    """Tests for bound logging context."""

    def test_bound_values_appear(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test bound context is merged into every event until cleared."""
        configure_logging(level="INFO", json_format=True)
        bind_context(replay_seed="daily-42")
        get_logger("test").info("first")
        clear_context()
        get_logger("test").info("second")

        first, second = capsys.readouterr().out.strip().splitlines()
        assert '"replay_seed": "daily-42"' in first
        assert "replay_seed" not in second
