"""Configuration management for the hop engine.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file. Only operational knobs live here (log output,
history bounds, fallback seed). Game rules live in
:mod:`hop_engine.core.constants` so that a replay never depends on the
environment it runs in.

Example:
    >>> from hop_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.engine.default_seed
    '0'

Environment Variables:
    HOP_ENGINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    HOP_ENGINE_JSON_LOGS: Emit JSON log lines instead of console output
    HOP_ENGINE_DEFAULT_SEED: Seed used when a run is started with an empty seed
    HOP_ENGINE_HISTORY_LIMIT: Number of undo snapshots retained
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hop_engine.core.exceptions import ConfigurationError


class EngineSettings(BaseSettings):
    """Configuration for simulation bookkeeping.

    Attributes:
        default_seed: Seed substituted for an empty or missing seed.
        message_log_limit: Number of messages retained on the state.
        history_limit: Number of undo snapshots retained on the state.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOP_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_seed: str = Field(
        default="0",
        min_length=1,
        description="Fallback seed for empty seeds",
    )
    message_log_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Messages retained on the state",
    )
    history_limit: int = Field(
        default=50,
        ge=0,
        le=1000,
        description="Undo snapshots retained on the state",
    )


class LoggingSettings(BaseSettings):
    """Configuration for structured logging.

    Attributes:
        log_level: Minimum level emitted.
        json_logs: Emit JSON instead of console-rendered lines.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOP_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        engine: Simulation bookkeeping settings.
        logging: Logging settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOP_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="hop-engine",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @model_validator(mode="after")
    def validate_history_fits_log(self) -> "Settings":
        """Ensure the undo history does not outgrow the message log.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If history_limit exceeds message_log_limit
                by more than an order of magnitude.
        """
        if self.engine.history_limit > self.engine.message_log_limit * 10:
            raise ConfigurationError(
                f"history_limit ({self.engine.history_limit}) must not exceed "
                f"ten times message_log_limit ({self.engine.message_log_limit})",
                config_key="history_limit",
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the engine settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load engine settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "EngineSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
