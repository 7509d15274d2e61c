"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the hop engine test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from hop_engine.engine.scenarios import build_scenario_state
from hop_engine.models.hex import Hex


if TYPE_CHECKING:
    from collections.abc import Generator

    from hop_engine.models.state import WorldState


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from hop_engine.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "HOP_ENGINE_LOG_LEVEL": "DEBUG",
        "HOP_ENGINE_DEFAULT_SEED": "env-seed",
        "HOP_ENGINE_HISTORY_LIMIT": "5",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Grid Fixtures
# =============================================================================


@pytest.fixture
def spawn() -> Hex:
    """Provide the player spawn cell of the default arena."""
    return Hex(q=3, r=8)


# =============================================================================
# Scenario Fixtures
# =============================================================================


@pytest.fixture
def empty_state(spawn: Hex) -> WorldState:
    """Provide a scenario with the player alone at spawn."""
    return build_scenario_state(player_position=spawn)


@pytest.fixture
def center_state() -> WorldState:
    """Provide a scenario with the player alone in the middle of the arena."""
    return build_scenario_state(player_position=Hex(q=3, r=4))


@pytest.fixture
def spear_state(spawn: Hex) -> WorldState:
    """Provide a footman two cells north of the player, in line."""
    return build_scenario_state(
        player_position=spawn,
        enemies=[("footman", Hex(q=3, r=6))],
    )
