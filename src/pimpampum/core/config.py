"""Configuration management for the Pim Pam Pum simulator.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file. Engine and runner arguments always win over
configured values; configuration only supplies defaults.

Example:
    >>> from pimpampum.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.combat.max_rounds
    20

Environment Variables:
    PIMPAMPUM_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    PIMPAMPUM_JSON_LOGS: Emit JSON log lines instead of console output
    PIMPAMPUM_COMBAT_MAX_ROUNDS: Round cap before a combat is scored
    PIMPAMPUM_SIMULATION_NUM_SIMULATIONS: Default combats per matchup
    PIMPAMPUM_SIMULATION_WORKERS: Worker processes for batch simulation
    PIMPAMPUM_SIMULATION_SEED: Base seed for reproducible batches
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pimpampum.core.exceptions import ConfigurationError


DICE_NOTATION_PATTERN = r"^(\d+)d(\d+)([+-]\d+)?$"


class CombatSettings(BaseSettings):
    """Rule constants for combat resolution.

    Attributes:
        max_rounds: Hard cap on rounds; reaching it scores the combat by
            living members.
        vengeance_dice: Dice added to the avenger's strength on a counter.
        ambush_dice: Attack bonus granted by a coordinated ambush.
        enchant_dice: Permanent attack bonus granted by weapon enchantment.
    """

    model_config = SettingsConfigDict(
        env_prefix="PIMPAMPUM_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_rounds: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Round cap for a single combat",
    )
    vengeance_dice: str = Field(
        default="1d8",
        pattern=DICE_NOTATION_PATTERN,
        description="Vengeance counter-attack dice",
    )
    ambush_dice: str = Field(
        default="1d8",
        pattern=DICE_NOTATION_PATTERN,
        description="Coordinated ambush attack bonus dice",
    )
    enchant_dice: str = Field(
        default="1d6",
        pattern=DICE_NOTATION_PATTERN,
        description="Enchanted weapon attack bonus dice",
    )


class SimulationSettings(BaseSettings):
    """Defaults for batch simulation.

    Attributes:
        num_simulations: Combats per matchup when none is requested.
        workers: Worker processes; 1 runs everything in-process.
        seed: Optional non-negative base seed for reproducible batches.
        chunk_size: Combats per batch; batches are the unit of work handed
            to workers.
    """

    model_config = SettingsConfigDict(
        env_prefix="PIMPAMPUM_SIMULATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    num_simulations: int = Field(
        default=500,
        ge=1,
        description="Combats per matchup",
    )
    workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Worker processes for batch simulation",
    )
    seed: int | None = Field(
        default=None,
        ge=0,
        description="Base seed for reproducible batches",
    )
    chunk_size: int = Field(
        default=250,
        ge=1,
        description="Combats per worker batch",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        log_level: Application logging level.
        json_logs: Emit JSON log lines.
        combat: Combat rule settings.
        simulation: Batch simulation settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="PIMPAMPUM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="pimpampum",
        description="Application name stamped on log events",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version stamped on log events",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    combat: CombatSettings = Field(default_factory=CombatSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
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
    "CombatSettings",
    "SimulationSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
