"""Speed ordering for a round.

Every character that chose a card submits one ActionEntry; entries are
resolved fastest first. Submission order (team 1 before team 2, roster
order within a team) breaks speed ties.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pimpampum.engine.character import StatSnapshot
from pimpampum.engine.modifiers import CombatantId


@dataclass(frozen=True)
class ActionEntry:
    """One queued action.

    Attributes:
        actor: Handle of the acting character.
        name: Actor's display name for narration.
        card_index: Index of the chosen card in the actor's hand.
        speed: Actor's speed resolved with the card's modifier.
    """

    actor: CombatantId
    name: str
    card_index: int
    speed: StatSnapshot

    @property
    def sort_key(self) -> int:
        return self.speed.total


def order_by_speed(entries: Iterable[ActionEntry]) -> list[ActionEntry]:
    """Stable sort, highest speed first."""
    return sorted(entries, key=lambda entry: entry.sort_key, reverse=True)


__all__ = [
    "ActionEntry",
    "order_by_speed",
]
