"""Monte Carlo simulation and balance reports.

Submodules:
    runner: Repeated combats with optional process fan-out
    reports: Matchup matrix, team ranking and card analysis
"""

from __future__ import annotations

from pimpampum.simulation.runner import (
    SimulationBatch,
    SimulationResults,
    build_team,
    plan_batches,
    run_batch,
    run_simulation,
)
from pimpampum.simulation.reports import (
    MatchupReport,
    TeamComposition,
    card_analysis_compositions,
    default_compositions,
    run_card_analysis,
    run_matchup_matrix,
)


__all__ = [
    # Runner
    "SimulationResults",
    "SimulationBatch",
    "build_team",
    "plan_batches",
    "run_batch",
    "run_simulation",
    # Reports
    "TeamComposition",
    "default_compositions",
    "card_analysis_compositions",
    "MatchupReport",
    "run_matchup_matrix",
    "run_card_analysis",
]
