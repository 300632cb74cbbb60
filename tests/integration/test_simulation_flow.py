"""Integration tests for simulation runs and reports."""

from __future__ import annotations

import pytest

from pimpampum.content.characters import (
    create_fighter,
    create_goblin,
    create_goblin_shaman,
    create_rogue,
    create_wizard,
)
from pimpampum.simulation.reports import default_compositions, run_matchup_matrix
from pimpampum.simulation.runner import run_simulation


class TestParallelSimulation:
    """Runs split across worker processes."""

    def test_worker_count_does_not_change_results(self) -> None:
        """Test a seeded run is identical in-process and on a pool."""
        team1 = [create_fighter, create_wizard]
        team2 = [create_goblin, create_goblin_shaman]

        serial = run_simulation(team1, team2, 24, seed=7, workers=1, chunk_size=5)
        parallel = run_simulation(team1, team2, 24, seed=7, workers=3, chunk_size=5)

        assert serial == parallel
        assert parallel.num_simulations == 24

    def test_unseeded_parallel_counts(self) -> None:
        """Test unseeded pool runs still account for every combat."""
        results = run_simulation(
            [create_rogue], [create_goblin], 12, workers=2, chunk_size=4
        )

        assert results.team1_wins + results.team2_wins + results.draws == 12


class TestBalanceReports:
    """Small end-to-end balance runs on the reference teams."""

    @pytest.mark.parametrize("equipped", [True, False])
    def test_reference_matrix(self, equipped: bool) -> None:
        """Test the five reference teams fill a complete matrix."""
        compositions = default_compositions(equipped=equipped)

        report = run_matchup_matrix(compositions, 2, seed=5, workers=1)

        assert len(report.results) == 20
        assert all(games == 16 for games in report.total_games.values())
        ranking = report.ranking()
        assert len(ranking) == 5
        assert [rate for _, rate in ranking] == sorted(
            (rate for _, rate in ranking), reverse=True
        )
