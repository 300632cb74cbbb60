"""Custom exception hierarchy for the Pim Pam Pum combat simulator.

All exceptions inherit from PimPamPumError so callers can catch every
simulator failure at the application boundary while still reading the
domain-specific context carried in ``details``.

Combat resolution itself never raises: missing targets, dead protectors
and empty hands are skipped. Errors surface only for invalid configuration
(empty rosters, bad dice notation, broken settings).

Example:
    >>> from pimpampum.core.exceptions import DiceRollError
    >>> raise DiceRollError("Invalid dice notation", expression="1x6")
"""

from __future__ import annotations

from typing import Any


class PimPamPumError(Exception):
    """Base exception for all simulator errors.

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
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(PimPamPumError):
    """Base exception for combat engine errors."""


class CombatError(GameEngineError):
    """Raised when a combat cannot be set up or continued.

    Carries the combatant handle and round number when known.
    """

    def __init__(
        self,
        message: str,
        *,
        combatant: str | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            combatant: Display form of the combatant involved.
            round_number: Current combat round when the error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if combatant:
            combined_details["combatant"] = combatant
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


class InvalidRosterError(CombatError):
    """Raised when a combat is configured with an unusable roster.

    Both teams need at least one member for the engine to start.
    """

    def __init__(
        self,
        message: str,
        *,
        team: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize roster error with the offending team id.

        Args:
            message: Human-readable error description.
            team: Team id (1 or 2) whose roster is invalid.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if team is not None:
            combined_details["team"] = team
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when dice notation cannot be parsed or is out of range."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(PimPamPumError):
    """Raised when application configuration is invalid."""

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


class ValidationError(PimPamPumError):
    """Raised when content or report input fails validation.

    Used for malformed team compositions and unknown character classes
    requested from the command line.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
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
    # Base exception
    "PimPamPumError",
    # Game engine exceptions
    "GameEngineError",
    "CombatError",
    "InvalidRosterError",
    "DiceRollError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
