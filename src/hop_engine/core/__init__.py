"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        HopEngineError: Base exception for all engine errors.
        GameEngineError: Simulation errors converted to messages by the reducer.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.

    Configuration:
        Settings: Main settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up engine logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from hop_engine.core.config import (
    EngineSettings,
    LoggingSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from hop_engine.core.exceptions import (
    ConfigurationError,
    GameEngineError,
    HopEngineError,
    InvalidActionError,
    InvalidGameStateError,
    SkillError,
    UnknownSkillError,
    UpgradeError,
    ValidationError,
)
from hop_engine.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "HopEngineError",
    "GameEngineError",
    "InvalidGameStateError",
    "InvalidActionError",
    "SkillError",
    "UnknownSkillError",
    "UpgradeError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "EngineSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
