"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        PimPamPumError: Base exception for all simulator errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Content and input validation errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        bound_context: Add context for the duration of a block.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from pimpampum.core.config import (
    CombatSettings,
    Settings,
    SimulationSettings,
    clear_settings_cache,
    get_settings,
)
from pimpampum.core.exceptions import (
    CombatError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidRosterError,
    PimPamPumError,
    ValidationError,
)
from pimpampum.core.logging import (
    bind_context,
    bound_context,
    clear_context,
    configure_logging,
    get_logger,
    init_worker_logging,
    logging_options,
    unbind_context,
)


__all__ = [
    # Base exception
    "PimPamPumError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "CombatError",
    "InvalidRosterError",
    "DiceRollError",
    # Configuration
    "Settings",
    "CombatSettings",
    "SimulationSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "bound_context",
    "clear_context",
    "logging_options",
    "init_worker_logging",
]
