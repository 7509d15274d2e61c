"""Custom exception hierarchy for the hop engine.

All exceptions inherit from HopEngineError, enabling unified error handling
at the reducer boundary while preserving domain-specific context. Nothing
in this hierarchy escapes ``reduce``: the reducer converts every engine
error into a message appended to the state's log.

Example:
    >>> from hop_engine.core.exceptions import UnknownSkillError
    >>> raise UnknownSkillError("No such skill", skill_id="FIREBALL")
"""

from __future__ import annotations

from typing import Any


class HopEngineError(Exception):
    """Base exception for all hop engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(HopEngineError):
    """Base exception for simulation errors.

    Raised by engine helpers when an action, skill or upgrade cannot be
    processed. The reducer turns these into rejection messages.
    """


class InvalidGameStateError(GameEngineError):
    """Raised when an operation is attempted in an incompatible run status."""

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid state error with status context.

        Args:
            message: Human-readable error description.
            current_state: The run status at the time of the error.
            expected_states: Statuses in which the operation is valid.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class InvalidActionError(GameEngineError):
    """Raised when an action payload is malformed or not understood."""

    def __init__(
        self,
        message: str,
        *,
        action_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid action error.

        Args:
            message: Human-readable error description.
            action_type: The action discriminant, when known.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if action_type:
            combined_details["action_type"] = action_type
        super().__init__(message, details=combined_details)


class SkillError(GameEngineError):
    """Base exception for skill lookup and execution failures."""

    def __init__(
        self,
        message: str,
        *,
        skill_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize skill error with skill context.

        Args:
            message: Human-readable error description.
            skill_id: Identifier of the skill involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if skill_id:
            combined_details["skill_id"] = skill_id
        super().__init__(message, details=combined_details)


class UnknownSkillError(SkillError):
    """Raised when a skill id is not present in the registry."""


class UpgradeError(SkillError):
    """Raised when an upgrade is not part of a skill's fixed upgrade set."""

    def __init__(
        self,
        message: str,
        *,
        skill_id: str | None = None,
        upgrade_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize upgrade error.

        Args:
            message: Human-readable error description.
            skill_id: Identifier of the skill the upgrade was applied to.
            upgrade_id: Identifier of the rejected upgrade.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if upgrade_id:
            combined_details["upgrade_id"] = upgrade_id
        super().__init__(message, skill_id=skill_id, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(HopEngineError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(HopEngineError):
    """Raised when serialized state or scenario data fails validation."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: The field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    "HopEngineError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "InvalidActionError",
    "SkillError",
    "UnknownSkillError",
    "UpgradeError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
