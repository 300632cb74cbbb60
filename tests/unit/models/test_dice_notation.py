"""Tests for dice expressions."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pimpampum.core.exceptions import DiceRollError
from pimpampum.models.dice import DiceRoll, DiceSource


class TestDiceRollParsing:
    """Tests for dice notation parsing and rendering."""

    @pytest.mark.parametrize(
        ("notation", "count", "sides", "modifier"),
        [
            ("1d6", 1, 6, 0),
            ("2d4", 2, 4, 0),
            ("1d4-1", 1, 4, -1),
            ("1d6+2", 1, 6, 2),
            (" 3d8 ", 3, 8, 0),
        ],
    )
    def test_parse(self, notation: str, count: int, sides: int, modifier: int) -> None:
        """Test valid notation parses to its parts."""
        dice = DiceRoll.parse(notation)

        assert (dice.count, dice.sides, dice.modifier) == (count, sides, modifier)

    @pytest.mark.parametrize("notation", ["d6", "1x6", "1d", "", "1d6+", "-1d6"])
    def test_parse_invalid(self, notation: str) -> None:
        """Test malformed notation raises DiceRollError."""
        with pytest.raises(DiceRollError) as exc_info:
            DiceRoll.parse(notation)

        assert exc_info.value.details["expression"] == notation

    @pytest.mark.parametrize("notation", ["1d6", "2d4-1", "1d6+2"])
    def test_str_renders_notation(self, notation: str) -> None:
        """Test that str() gives back the notation."""
        assert str(DiceRoll.parse(notation)) == notation

    def test_str_fixed(self) -> None:
        """Test that constant expressions render as a number."""
        assert str(DiceRoll(count=0, sides=0, modifier=3)) == "3"

    def test_rolled_dice_need_sides(self) -> None:
        """Test that dice with zero sides are rejected."""
        with pytest.raises(DiceRollError):
            DiceRoll(count=1, sides=0)

    def test_frozen(self) -> None:
        """Test that expressions are immutable."""
        dice = DiceRoll.parse("1d6")

        with pytest.raises(Exception):
            dice.count = 2  # type: ignore[misc]


class TestDiceRollValues:
    """Tests for rolling and expectations."""

    @pytest.mark.parametrize(
        ("notation", "expected"),
        [
            ("1d6", 3.5),
            ("2d4", 5.0),
            ("1d4-1", 1.5),
            ("1d8+2", 6.5),
        ],
    )
    def test_average(self, notation: str, expected: float) -> None:
        """Test closed-form expectation c*(1+s)/2 + m."""
        assert DiceRoll.parse(notation).average() == expected

    def test_average_fixed(self) -> None:
        """Test expectation of a constant expression."""
        assert DiceRoll(count=0, sides=0, modifier=-2).average() == -2.0

    def test_roll_within_bounds(self, seeded_roller: DiceSource) -> None:
        """Test rolls stay within the dice range."""
        dice = DiceRoll.parse("2d6+1")

        for _ in range(200):
            assert 3 <= dice.roll(seeded_roller) <= 13

    def test_roll_never_negative(self, make_dice: Callable[..., DiceSource]) -> None:
        """Test that a negative modifier floors the roll at zero."""
        dice = DiceRoll.parse("1d4-3")

        assert dice.roll(make_dice(per_die=1)) == 0
        assert dice.roll(make_dice(per_die=4)) == 1

    def test_constant_negative_floors(self, fixed_dice: DiceSource) -> None:
        """Test that a negative constant rolls zero."""
        assert DiceRoll(count=0, sides=0, modifier=-5).roll(fixed_dice) == 0
        assert DiceRoll(count=0, sides=0, modifier=4).roll(fixed_dice) == 4

    def test_roll_uses_source(self, make_dice: Callable[..., DiceSource]) -> None:
        """Test that rolls delegate the dice to the source."""
        source = make_dice(per_die=3)

        assert DiceRoll.parse("2d6+1").roll(source) == 7
        assert source.rolls == [(2, 6)]
