"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from pimpampum.core.config import (
    CombatSettings,
    Settings,
    SimulationSettings,
    clear_settings_cache,
    get_settings,
)
from pimpampum.core.exceptions import ConfigurationError
from pimpampum.models.dice import DiceRoll


class TestCombatSettings:
    """Tests for CombatSettings configuration."""

    def test_default_values(self) -> None:
        """Test default combat rule constants."""
        settings = CombatSettings()

        assert settings.max_rounds == 20
        assert settings.vengeance_dice == "1d8"
        assert settings.ambush_dice == "1d8"
        assert settings.enchant_dice == "1d6"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test combat settings read their own env prefix."""
        monkeypatch.setenv("PIMPAMPUM_COMBAT_MAX_ROUNDS", "5")
        monkeypatch.setenv("PIMPAMPUM_COMBAT_ENCHANT_DICE", "2d4+1")

        settings = CombatSettings()

        assert settings.max_rounds == 5
        assert settings.enchant_dice == "2d4+1"

    def test_notation_pattern_shared_with_parser(self) -> None:
        """Test that every notation the settings accept also parses."""
        settings = CombatSettings(vengeance_dice="2d4-1")

        assert DiceRoll.parse(settings.vengeance_dice) == DiceRoll(count=2, sides=4, modifier=-1)

    def test_invalid_dice_notation(self) -> None:
        """Test that malformed dice notation is rejected."""
        with pytest.raises(PydanticValidationError):
            CombatSettings(vengeance_dice="d8")

    @pytest.mark.parametrize("max_rounds", [0, 1001])
    def test_max_rounds_bounds(self, max_rounds: int) -> None:
        """Test that the round cap stays within bounds."""
        with pytest.raises(PydanticValidationError):
            CombatSettings(max_rounds=max_rounds)


class TestSimulationSettings:
    """Tests for SimulationSettings configuration."""

    def test_default_values(self) -> None:
        """Test default simulation settings."""
        settings = SimulationSettings()

        assert settings.num_simulations == 500
        assert settings.workers == 1
        assert settings.seed is None
        assert settings.chunk_size == 250

    def test_negative_seed_rejected(self) -> None:
        """Test that a negative seed is rejected."""
        with pytest.raises(PydanticValidationError):
            SimulationSettings(seed=-3)

    def test_zero_seed_allowed(self) -> None:
        """Test that zero is a valid seed."""
        assert SimulationSettings(seed=0).seed == 0

    def test_workers_bounds(self) -> None:
        """Test worker count validation."""
        with pytest.raises(PydanticValidationError):
            SimulationSettings(workers=0)


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "pimpampum"
        assert settings.app_version == "0.1.0"
        assert settings.log_level == "WARNING"
        assert settings.json_logs is False
        assert settings.combat.max_rounds == 20
        assert settings.simulation.num_simulations == 500

    def test_env_vars_applied(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test that environment variables reach nested settings."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.combat.max_rounds == 7
        assert settings.simulation.num_simulations == 40
        assert settings.simulation.seed == 11

    def test_invalid_log_level(self) -> None:
        """Test that unknown log levels are rejected."""
        with pytest.raises(PydanticValidationError):
            Settings(log_level="LOUD")


class TestGetSettings:
    """Tests for get_settings singleton function."""

    def test_returns_settings_instance(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that get_settings returns Settings instance."""
        monkeypatch.chdir(tmp_path)

        settings = get_settings()

        assert isinstance(settings, Settings)

    def test_caching(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that settings are cached."""
        monkeypatch.chdir(tmp_path)

        first = get_settings()
        second = get_settings()

        assert first is second

    def test_clear_cache(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that clearing the cache reloads the environment."""
        monkeypatch.chdir(tmp_path)
        first = get_settings()

        monkeypatch.setenv("PIMPAMPUM_COMBAT_MAX_ROUNDS", "3")
        clear_settings_cache()
        second = get_settings()

        assert first is not second
        assert second.combat.max_rounds == 3

    def test_invalid_env_wrapped(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that load failures surface as ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PIMPAMPUM_SIMULATION_WORKERS", "not-a-number")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert "original_error" in exc_info.value.details

    def test_negative_seed_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that an invalid seed in the environment surfaces as ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PIMPAMPUM_SIMULATION_SEED", "-1")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert "seed" in exc_info.value.details["original_error"]
