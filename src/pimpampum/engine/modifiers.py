"""Timed stat modifiers, defense grants and combatant handles.

Relations between combatants (conditional bonuses, defense grants,
sacrifice and vengeance bindings) refer to CombatantId handles issued by
the engine when it adopts the rosters, never to display names.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple

from pimpampum.models.dice import DiceRoll, DiceSource
from pimpampum.models.enums import ModifierDuration, Stat


class CombatantId(NamedTuple):
    """Stable handle for one roster slot in one combat.

    Attributes:
        team: Team id, 1 or 2.
        index: Position in that team's roster.
    """

    team: int
    index: int

    def __str__(self) -> str:
        return f"T{self.team}#{self.index}"


@dataclass(frozen=True)
class StatModifier:
    """A timed adjustment to one stat.

    A modifier carrying dice re-rolls them on every resolution; one without
    dice contributes ``value``.

    Attributes:
        stat: Stat being adjusted.
        value: Flat contribution when no dice are attached.
        duration: Remaining lifetime.
        dice: Optional dice rolled on every query.
        source: Label of the card or effect that installed it.
        condition: If set, the modifier only applies against this combatant.
    """

    stat: Stat
    value: int = 0
    duration: ModifierDuration = ModifierDuration.THIS_TURN
    dice: DiceRoll | None = None
    source: str = ""
    condition: CombatantId | None = None

    def applies_against(self, against: CombatantId | None) -> bool:
        """Whether the modifier counts for a query made against ``against``.

        Unconditional modifiers always count. Conditional ones only count
        when the query names their combatant.
        """
        return self.condition is None or self.condition == against

    def resolve(self, source: DiceSource) -> int:
        """Current contribution; dice are rolled fresh."""
        if self.dice is not None:
            return self.dice.roll(source)
        return self.value

    def average(self) -> float:
        if self.dice is not None:
            return self.dice.average()
        return float(self.value)

    def advanced(self) -> StatModifier | None:
        """The modifier after one round boundary, or None once expired."""
        next_duration = self.duration.advance()
        if next_duration is None:
            return None
        if next_duration is self.duration:
            return self
        return replace(self, duration=next_duration)


@dataclass(frozen=True)
class DefenseGrant:
    """Defense banked by one character for another.

    The grantor's defense is captured when the card resolves; the dice are
    rolled when the grant is consumed by an incoming attack. A hit against a
    consumed grant wounds the grantor.

    Attributes:
        benefactor: Handle of the granting character.
        base_defense: Grantor's resolved defense at grant time.
        dice: Card dice rolled on consumption.
        source: Name of the granting card.
    """

    benefactor: CombatantId
    base_defense: int
    dice: DiceRoll | None = None
    source: str = ""

    def roll(self, source: DiceSource) -> int:
        """Total defense offered by this grant."""
        rolled = self.dice.roll(source) if self.dice is not None else 0
        return self.base_defense + rolled


__all__ = [
    "CombatantId",
    "StatModifier",
    "DefenseGrant",
]
