"""Balance reports built on the simulation runner.

Two reports are provided:

- The matchup matrix plays every ordered pair of distinct team
  compositions and ranks compositions by their overall win rate across
  both seats.
- The card analysis plays every ordered pair of compositions, mirror
  matches included, and merges the card statistics.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from pimpampum.content.characters import (
    CharacterFactory,
    create_fighter,
    create_fighter_naked,
    create_goblin,
    create_goblin_naked,
    create_goblin_shaman,
    create_goblin_shaman_naked,
    create_rogue,
    create_rogue_naked,
    create_wizard,
    create_wizard_naked,
)
from pimpampum.core.config import get_settings
from pimpampum.core.exceptions import ValidationError
from pimpampum.core.logging import get_logger
from pimpampum.engine.dice import derive_seed
from pimpampum.engine.stats import CombatStats
from pimpampum.simulation.runner import SimulationResults, run_simulation


logger = get_logger(__name__)


# =============================================================================
# Compositions
# =============================================================================


@dataclass(frozen=True)
class TeamComposition:
    """A named team built from character factories."""

    name: str
    factories: tuple[CharacterFactory, ...]


def default_compositions(*, equipped: bool = True) -> list[TeamComposition]:
    """The five 2v2 teams of the balance matrix."""
    if equipped:
        fighter, wizard, rogue = create_fighter, create_wizard, create_rogue
        goblin, shaman = create_goblin, create_goblin_shaman
    else:
        fighter, wizard, rogue = create_fighter_naked, create_wizard_naked, create_rogue_naked
        goblin, shaman = create_goblin_naked, create_goblin_shaman_naked
    return [
        TeamComposition("Fighter+Wizard", (fighter, wizard)),
        TeamComposition("Fighter+Rogue", (fighter, rogue)),
        TeamComposition("Wizard+Rogue", (wizard, rogue)),
        TeamComposition("Goblin+Shaman", (goblin, shaman)),
        TeamComposition("2x Goblin", (goblin, goblin)),
    ]


def card_analysis_compositions() -> list[TeamComposition]:
    """The four equipped 2v2 teams used for card analysis."""
    return default_compositions(equipped=True)[:4]


def _check_compositions(compositions: Sequence[TeamComposition]) -> None:
    if not compositions:
        raise ValidationError(
            "At least one team composition is required",
            field_name="compositions",
            invalid_value=[],
        )
    names = [composition.name for composition in compositions]
    if len(set(names)) != len(names):
        raise ValidationError(
            "Team composition names must be unique",
            field_name="compositions",
            invalid_value=names,
        )


# =============================================================================
# Matchup Matrix
# =============================================================================


@dataclass
class MatchupReport:
    """Pairwise results between team compositions.

    Attributes:
        names: Composition names in matrix order.
        results: Results keyed by (row, column); the row is team 1.
        total_wins: Wins per composition in either seat.
        total_games: Games per composition in either seat.
    """

    names: list[str]
    results: dict[tuple[str, str], SimulationResults] = field(default_factory=dict)
    total_wins: dict[str, int] = field(default_factory=dict)
    total_games: dict[str, int] = field(default_factory=dict)

    def add(self, row: str, column: str, results: SimulationResults) -> None:
        self.results[(row, column)] = results
        self.total_wins[row] = self.total_wins.get(row, 0) + results.team1_wins
        self.total_games[row] = self.total_games.get(row, 0) + results.num_simulations
        self.total_wins[column] = self.total_wins.get(column, 0) + results.team2_wins
        self.total_games[column] = self.total_games.get(column, 0) + results.num_simulations

    def win_rate(self, row: str, column: str) -> float | None:
        """Row's win rate as team 1 against column, None on the diagonal."""
        results = self.results.get((row, column))
        return results.team1_win_rate if results is not None else None

    def overall_win_rate(self, name: str) -> float:
        games = self.total_games.get(name, 0)
        if games == 0:
            return 0.0
        return self.total_wins.get(name, 0) / games * 100.0

    def ranking(self) -> list[tuple[str, float]]:
        """Compositions by overall win rate, strongest first."""
        return sorted(
            ((name, self.overall_win_rate(name)) for name in self.names),
            key=lambda item: item[1],
            reverse=True,
        )


def run_matchup_matrix(
    compositions: Sequence[TeamComposition],
    num_simulations: int | None = None,
    *,
    seed: int | None = None,
    workers: int | None = None,
) -> MatchupReport:
    """Play every ordered pair of distinct compositions.

    Args:
        compositions: Teams to compare; names must be unique.
        num_simulations: Combats per pairing.
        seed: Base seed; each pairing derives its own.
        workers: Worker processes per pairing.

    Returns:
        The filled matchup report.
    """
    _check_compositions(compositions)
    if seed is None:
        seed = get_settings().simulation.seed
    report = MatchupReport(names=[composition.name for composition in compositions])
    width = len(compositions)
    for row_index, row in enumerate(compositions):
        for column_index, column in enumerate(compositions):
            if row_index == column_index:
                continue
            results = run_simulation(
                row.factories,
                column.factories,
                num_simulations,
                seed=derive_seed(seed, row_index * width + column_index),
                workers=workers,
            )
            report.add(row.name, column.name, results)
            logger.debug(
                "Matchup simulated",
                team1=row.name,
                team2=column.name,
                team1_win_rate=round(results.team1_win_rate, 1),
            )
    return report


# =============================================================================
# Card Analysis
# =============================================================================


def run_card_analysis(
    compositions: Sequence[TeamComposition],
    num_simulations: int | None = None,
    *,
    seed: int | None = None,
    workers: int | None = None,
) -> CombatStats:
    """Merge card statistics over every ordered pair, mirrors included."""
    _check_compositions(compositions)
    if seed is None:
        seed = get_settings().simulation.seed
    width = len(compositions)
    snapshots = []
    for row_index, row in enumerate(compositions):
        for column_index, column in enumerate(compositions):
            results = run_simulation(
                row.factories,
                column.factories,
                num_simulations,
                seed=derive_seed(seed, row_index * width + column_index),
                workers=workers,
            )
            snapshots.append(results.stats)
    return CombatStats.combine(snapshots)


__all__ = [
    "TeamComposition",
    "default_compositions",
    "card_analysis_compositions",
    "MatchupReport",
    "run_matchup_matrix",
    "run_card_analysis",
]
