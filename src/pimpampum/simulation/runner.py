"""Monte Carlo simulation runner.

Repeats combats between two team compositions and aggregates win/draw
counts, rounds and card statistics. Combats are independent, so the runner
splits them into fixed-size batches that run either in-process or on a
ProcessPoolExecutor. Each batch owns a private DiceRoller whose seed is
derived from the base seed and the batch index; given a seed, the results
do not depend on the number of workers.

Example:
    >>> from pimpampum.content import create_fighter, create_goblin
    >>> results = run_simulation([create_fighter], [create_goblin], 100, seed=1)
    >>> results.team1_wins + results.team2_wins + results.draws
    100
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field

from pimpampum.core.config import CombatSettings, get_settings
from pimpampum.core.exceptions import InvalidRosterError, ValidationError
from pimpampum.core.logging import (
    bound_context,
    get_logger,
    init_worker_logging,
    logging_options,
)
from pimpampum.engine.character import Character
from pimpampum.engine.combat import CombatEngine, CombatOutcome, Winner
from pimpampum.engine.dice import DiceRoller, derive_seed
from pimpampum.engine.stats import CombatStats


logger = get_logger(__name__)

Factory = Callable[[str], Character]


# =============================================================================
# Results
# =============================================================================


@dataclass
class SimulationResults:
    """Aggregated outcome of a batch of combats.

    Only totals are stored; every rate is derived from them.

    Attributes:
        team1_wins: Combats won by team 1.
        team2_wins: Combats won by team 2.
        draws: Combats that ended in a draw.
        total_rounds: Rounds played across all combats.
        num_simulations: Combats run.
        stats: Merged card statistics.
    """

    team1_wins: int = 0
    team2_wins: int = 0
    draws: int = 0
    total_rounds: int = 0
    num_simulations: int = 0
    stats: CombatStats = field(default_factory=CombatStats)

    def _percent(self, count: int) -> float:
        if self.num_simulations == 0:
            return 0.0
        return count / self.num_simulations * 100.0

    @property
    def team1_win_rate(self) -> float:
        return self._percent(self.team1_wins)

    @property
    def team2_win_rate(self) -> float:
        return self._percent(self.team2_wins)

    @property
    def draw_rate(self) -> float:
        return self._percent(self.draws)

    @property
    def avg_rounds(self) -> float:
        if self.num_simulations == 0:
            return 0.0
        return self.total_rounds / self.num_simulations

    def record(self, outcome: CombatOutcome) -> None:
        """Add one combat outcome to the totals."""
        self.num_simulations += 1
        self.total_rounds += outcome.rounds
        self.stats.merge(outcome.stats)
        match outcome.winner:
            case Winner.TEAM1:
                self.team1_wins += 1
            case Winner.TEAM2:
                self.team2_wins += 1
            case Winner.DRAW:
                self.draws += 1

    def merge(self, other: SimulationResults) -> None:
        """Add another batch's totals into this one."""
        self.team1_wins += other.team1_wins
        self.team2_wins += other.team2_wins
        self.draws += other.draws
        self.total_rounds += other.total_rounds
        self.num_simulations += other.num_simulations
        self.stats.merge(other.stats)


# =============================================================================
# Batches
# =============================================================================


@dataclass(frozen=True)
class SimulationBatch:
    """A contiguous slice of combats run on one random stream.

    Attributes:
        index: Position of the batch within its run.
        team1: Team 1 factories.
        team2: Team 2 factories.
        start: Index of the first combat.
        count: Number of combats.
        seed: Seed of the batch's stream, or None.
        verbose: Narrate every combat.
        combat: Combat rule settings.
    """

    index: int
    team1: tuple[Factory, ...]
    team2: tuple[Factory, ...]
    start: int
    count: int
    seed: int | None
    verbose: bool
    combat: CombatSettings


def build_team(factories: Sequence[Factory], team: int, combat_index: int) -> list[Character]:
    """Instantiate a fresh roster named ``T{team}_{slot}_{combat}``."""
    return [
        factory(f"T{team}_{slot}_{combat_index}")
        for slot, factory in enumerate(factories)
    ]


def run_batch(batch: SimulationBatch) -> SimulationResults:
    """Run one batch of combats on its own random stream.

    Module-level so it can be submitted to worker processes.
    """
    results = SimulationResults()
    dice = DiceRoller(seed=batch.seed)
    with bound_context(batch=batch.index):
        for combat_index in range(batch.start, batch.start + batch.count):
            with bound_context(combat=combat_index):
                engine = CombatEngine(
                    build_team(batch.team1, 1, combat_index),
                    build_team(batch.team2, 2, combat_index),
                    verbose=batch.verbose,
                    dice=dice,
                    settings=batch.combat,
                )
                results.record(engine.run_combat())
        logger.debug(
            "Batch complete",
            combats=batch.count,
            team1_wins=results.team1_wins,
            team2_wins=results.team2_wins,
        )
    return results


def plan_batches(
    team1: Sequence[Factory],
    team2: Sequence[Factory],
    num_simulations: int,
    *,
    chunk_size: int,
    seed: int | None,
    verbose: bool,
    combat: CombatSettings,
) -> list[SimulationBatch]:
    """Split a run into fixed-size batches with derived seeds."""
    return [
        SimulationBatch(
            index=batch_index,
            team1=tuple(team1),
            team2=tuple(team2),
            start=start,
            count=min(chunk_size, num_simulations - start),
            seed=derive_seed(seed, batch_index),
            verbose=verbose,
            combat=combat,
        )
        for batch_index, start in enumerate(range(0, num_simulations, chunk_size))
    ]


# =============================================================================
# Runner
# =============================================================================


def run_simulation(
    team1_factories: Sequence[Factory],
    team2_factories: Sequence[Factory],
    num_simulations: int | None = None,
    *,
    verbose: bool = False,
    seed: int | None = None,
    workers: int | None = None,
    chunk_size: int | None = None,
    combat: CombatSettings | None = None,
) -> SimulationResults:
    """Run ``num_simulations`` independent combats and aggregate them.

    Args:
        team1_factories: One factory per team 1 slot.
        team2_factories: One factory per team 2 slot.
        num_simulations: Combats to run; the configured default if None.
        verbose: Narrate every combat. Verbose runs stay in-process.
        seed: Base seed for reproducible results.
        workers: Worker processes; the configured default if None.
        chunk_size: Combats per batch; the configured default if None.
        combat: Combat rule settings; the configured ones if None.

    Returns:
        Aggregated results.

    Raises:
        InvalidRosterError: If either team has no factories.
        ValidationError: If the simulation count is negative.
    """
    settings = get_settings()
    num_simulations = (
        settings.simulation.num_simulations if num_simulations is None else num_simulations
    )
    workers = settings.simulation.workers if workers is None else workers
    chunk_size = settings.simulation.chunk_size if chunk_size is None else chunk_size
    seed = settings.simulation.seed if seed is None else seed
    combat = combat or settings.combat

    for team, factories in ((1, team1_factories), (2, team2_factories)):
        if not factories:
            raise InvalidRosterError("Cannot simulate a team without characters", team=team)
    if num_simulations < 0:
        raise ValidationError(
            "Number of simulations cannot be negative",
            field_name="num_simulations",
            invalid_value=num_simulations,
        )
    if chunk_size < 1:
        raise ValidationError(
            "Chunk size must be positive",
            field_name="chunk_size",
            invalid_value=chunk_size,
        )

    batches = plan_batches(
        team1_factories,
        team2_factories,
        num_simulations,
        chunk_size=chunk_size,
        seed=seed,
        verbose=verbose,
        combat=combat,
    )

    start_time = time.perf_counter()
    results = SimulationResults()
    if workers <= 1 or verbose or len(batches) <= 1:
        for batch in batches:
            results.merge(run_batch(batch))
    else:
        with ProcessPoolExecutor(
            max_workers=min(workers, len(batches)),
            initializer=init_worker_logging,
            initargs=(logging_options(),),
        ) as executor:
            futures = [executor.submit(run_batch, batch) for batch in batches]
            for future in as_completed(futures):
                results.merge(future.result())

    logger.info(
        "Simulation complete",
        simulations=results.num_simulations,
        batches=len(batches),
        workers=workers,
        team1_win_rate=round(results.team1_win_rate, 1),
        team2_win_rate=round(results.team2_win_rate, 1),
        draw_rate=round(results.draw_rate, 1),
        elapsed_s=round(time.perf_counter() - start_time, 3),
    )
    return results


__all__ = [
    "Factory",
    "SimulationResults",
    "SimulationBatch",
    "build_team",
    "run_batch",
    "plan_batches",
    "run_simulation",
]
