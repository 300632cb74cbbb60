"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Pim Pam Pum test suite.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from pimpampum.engine.character import Character
    from pimpampum.engine.dice import DiceRoller
    from pimpampum.models.card import Card


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from pimpampum.core.config import clear_settings_cache

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
        "PIMPAMPUM_LOG_LEVEL": "DEBUG",
        "PIMPAMPUM_COMBAT_MAX_ROUNDS": "7",
        "PIMPAMPUM_SIMULATION_NUM_SIMULATIONS": "40",
        "PIMPAMPUM_SIMULATION_SEED": "11",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Dice Fixtures
# =============================================================================


class FixedDice:
    """Deterministic dice source.

    Every die shows ``per_die`` and every uniform draw returns ``draw``, so
    the selection policy always takes the first card when ``draw`` is 0.
    """

    def __init__(self, per_die: int = 0, draw: float = 0.0) -> None:
        self.per_die = per_die
        self.draw = draw
        self.rolls: list[tuple[int, int]] = []

    def roll_dice(self, count: int, sides: int) -> int:
        self.rolls.append((count, sides))
        return count * self.per_die

    def random(self) -> float:
        return self.draw


@pytest.fixture
def fixed_dice() -> FixedDice:
    """Dice that always roll zero and always pick the first card."""
    return FixedDice()


@pytest.fixture
def make_dice() -> Callable[..., FixedDice]:
    """Factory for FixedDice with chosen faces and draws."""
    return FixedDice


@pytest.fixture
def seeded_roller() -> DiceRoller:
    """A reproducible DiceRoller."""
    from pimpampum.engine.dice import DiceRoller

    return DiceRoller(seed=1234)


# =============================================================================
# Content Fixtures
# =============================================================================


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """Factory for cards with compact defaults.

    Dice are given as notation strings.
    """
    from pimpampum.models.card import Card
    from pimpampum.models.dice import DiceRoll
    from pimpampum.models.enums import CardType

    def _make(
        name: str = "Cop",
        card_type: CardType = CardType.PHYSICAL_ATTACK,
        *,
        physical: str | None = None,
        magic: str | None = None,
        defense: str | None = None,
        speed: int = 0,
        **kwargs: Any,
    ) -> Card:
        return Card(
            name=name,
            card_type=card_type,
            physical_attack=DiceRoll.parse(physical) if physical else None,
            magic_attack=DiceRoll.parse(magic) if magic else None,
            defense=DiceRoll.parse(defense) if defense else None,
            speed_modifier=speed,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_character() -> Callable[..., Character]:
    """Factory for bare characters with zeroed stats."""
    from pimpampum.engine.character import Character

    def _make(
        name: str = "Hero",
        *,
        max_wounds: int = 3,
        strength: int = 0,
        magic: int = 0,
        defense: int = 0,
        speed: int = 0,
        cards: tuple[Card, ...] = (),
        character_class: str = "Test",
    ) -> Character:
        return Character(
            name=name,
            max_wounds=max_wounds,
            strength=strength,
            magic=magic,
            defense=defense,
            speed=speed,
            cards=cards,
            character_class=character_class,
        )

    return _make


@pytest.fixture
def strike_card(make_card: Callable[..., Card]) -> Card:
    """A plain physical attack rolling 1d6."""
    return make_card("Cop", physical="1d6")


@pytest.fixture
def shield_card(make_card: Callable[..., Card]) -> Card:
    """A plain defense card rolling 1d4."""
    from pimpampum.models.enums import CardType

    return make_card("Escut", CardType.DEFENSE, defense="1d4")
