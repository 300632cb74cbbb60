"""Per-card and per-card-type usage counters.

Statistics from independent combats merge associatively, so batches can be
accumulated in any order or across worker processes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class CardStats:
    """Counters for one card name or card-type label.

    Attributes:
        plays: Times the card was played.
        plays_by_winner: Plays made by the team that went on to win.
        interrupted: Plays that fizzled because the Focus was interrupted.
    """

    plays: int = 0
    plays_by_winner: int = 0
    interrupted: int = 0

    @property
    def win_correlation(self) -> float:
        """Percentage of plays made by the eventual winner."""
        return self.plays_by_winner / self.plays * 100.0 if self.plays else 0.0

    @property
    def interrupt_rate(self) -> float:
        """Percentage of plays that were interrupted."""
        return self.interrupted / self.plays * 100.0 if self.plays else 0.0

    def merge(self, other: CardStats) -> None:
        self.plays += other.plays
        self.plays_by_winner += other.plays_by_winner
        self.interrupted += other.interrupted


@dataclass
class CombatStats:
    """Usage counters keyed by card name and by card-type label."""

    card_stats: dict[str, CardStats] = field(default_factory=dict)
    card_type_stats: dict[str, CardStats] = field(default_factory=dict)

    def _entries(self, card_name: str, card_type: str) -> tuple[CardStats, CardStats]:
        return (
            self.card_stats.setdefault(card_name, CardStats()),
            self.card_type_stats.setdefault(card_type, CardStats()),
        )

    def record_play(self, card_name: str, card_type: str) -> None:
        for entry in self._entries(card_name, card_type):
            entry.plays += 1

    def record_winner_play(self, card_name: str, card_type: str) -> None:
        for entry in self._entries(card_name, card_type):
            entry.plays_by_winner += 1

    def record_interrupted(self, card_name: str, card_type: str) -> None:
        for entry in self._entries(card_name, card_type):
            entry.interrupted += 1

    def merge(self, other: CombatStats) -> None:
        """Add another snapshot's counters into this one."""
        for name, stats in other.card_stats.items():
            self.card_stats.setdefault(name, CardStats()).merge(stats)
        for label, stats in other.card_type_stats.items():
            self.card_type_stats.setdefault(label, CardStats()).merge(stats)

    @classmethod
    def combine(cls, snapshots: Iterable[CombatStats]) -> CombatStats:
        total = cls()
        for snapshot in snapshots:
            total.merge(snapshot)
        return total

    def by_plays(self, *, types: bool = False) -> list[tuple[str, CardStats]]:
        """Entries sorted by play count, most played first."""
        source = self.card_type_stats if types else self.card_stats
        return sorted(source.items(), key=lambda item: item[1].plays, reverse=True)


__all__ = [
    "CardStats",
    "CombatStats",
]
