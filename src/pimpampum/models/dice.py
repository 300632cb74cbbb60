"""Dice expressions used by cards, equipment and modifiers.

A DiceRoll is an immutable ``NdS+M`` value. Rolling never returns a
negative number; the modifier can push a roll down to zero but no
further. Randomness always comes from an injected DiceSource so combats
can be reproduced with a seeded roller or a scripted stub.
"""

from __future__ import annotations

import re
from typing import Annotated, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pimpampum.core.config import DICE_NOTATION_PATTERN
from pimpampum.core.exceptions import DiceRollError


_NOTATION = re.compile(DICE_NOTATION_PATTERN)


@runtime_checkable
class DiceSource(Protocol):
    """Uniform random capability consumed by the engine."""

    def roll_dice(self, count: int, sides: int) -> int:
        """Return the sum of ``count`` uniform integers in ``[1, sides]``."""
        ...

    def random(self) -> float:
        """Return a uniform float in ``[0, 1)``."""
        ...


class DiceRoll(BaseModel):
    """A dice expression ``count`` d ``sides`` plus ``modifier``.

    Attributes:
        count: Number of dice; zero makes the expression a constant.
        sides: Faces per die; must be at least 1 when dice are rolled.
        modifier: Flat signed adjustment added after the dice.

    Example:
        >>> DiceRoll.parse("1d4-1").average()
        1.5
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    count: Annotated[int, Field(ge=0, description="Number of dice")] = 1
    sides: Annotated[int, Field(ge=0, description="Faces per die")] = 6
    modifier: int = Field(default=0, description="Flat modifier")

    @model_validator(mode="after")
    def validate_sides(self) -> "DiceRoll":
        """Ensure dice that are rolled have at least one face.

        Returns:
            Self if validation passes.

        Raises:
            DiceRollError: If ``count > 0`` and ``sides < 1``.
        """
        if self.count > 0 and self.sides < 1:
            raise DiceRollError(
                "Dice must have at least one side",
                expression=f"{self.count}d{self.sides}",
            )
        return self

    @classmethod
    def parse(cls, notation: str) -> DiceRoll:
        """Parse ``NdS``, ``NdS+M`` or ``NdS-M`` notation.

        Args:
            notation: Dice notation string.

        Returns:
            The parsed expression.

        Raises:
            DiceRollError: If the notation is malformed.
        """
        match = _NOTATION.match(notation.strip())
        if match is None:
            raise DiceRollError("Invalid dice notation", expression=notation)
        count, sides, modifier = match.groups()
        return cls(count=int(count), sides=int(sides), modifier=int(modifier or 0))

    def roll(self, source: DiceSource) -> int:
        """Roll the expression.

        Args:
            source: Random source providing the dice.

        Returns:
            Dice total plus modifier, floored at zero.
        """
        if self.count == 0:
            return max(0, self.modifier)
        return max(0, source.roll_dice(self.count, self.sides) + self.modifier)

    def average(self) -> float:
        """Expected value before flooring, used by selection heuristics."""
        if self.count == 0:
            return float(self.modifier)
        return self.count * (1 + self.sides) / 2 + self.modifier

    def __str__(self) -> str:
        if self.count == 0:
            return str(self.modifier)
        base = f"{self.count}d{self.sides}"
        if self.modifier:
            return f"{base}{self.modifier:+d}"
        return base


__all__ = [
    "DiceRoll",
    "DiceSource",
]
