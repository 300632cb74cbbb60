"""Pim Pam Pum - Command Line Interface

Runs balance simulations and prints the results as console tables.

Usage:
    pimpampum cards --simulations 300 --seed 7
    pimpampum teams --simulations 500 --workers 4
    pimpampum teams --naked
    pimpampum duel fighter,wizard goblin,goblin_shaman -n 1000
    pimpampum duel fighter goblin -n 1 --verbose
    pimpampum all
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pimpampum.content.characters import CharacterFactory, get_factory
from pimpampum.core.config import get_settings
from pimpampum.core.exceptions import PimPamPumError
from pimpampum.core.logging import configure_logging, get_logger
from pimpampum.engine.stats import CombatStats
from pimpampum.simulation.reports import (
    MatchupReport,
    card_analysis_compositions,
    default_compositions,
    run_card_analysis,
    run_matchup_matrix,
)
from pimpampum.simulation.runner import SimulationResults, run_simulation


logger = get_logger(__name__)

console = Console()


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================


def card_stats_table(stats: CombatStats, *, types: bool) -> Table:
    """Plays, winner plays, win correlation and interrupt rate per entry."""
    title = "Card Type Effectiveness" if types else "Individual Card Effectiveness"
    table = Table(title=title, show_header=True, header_style="bold yellow")
    table.add_column("Type" if types else "Card")
    table.add_column("Plays", justify="right")
    table.add_column("By Winner", justify="right")
    table.add_column("Win Corr.", justify="right")
    table.add_column("Interrupt%", justify="right")
    for name, entry in stats.by_plays(types=types):
        table.add_row(
            name,
            str(entry.plays),
            str(entry.plays_by_winner),
            f"{entry.win_correlation:.1f}%",
            f"{entry.interrupt_rate:.1f}%",
        )
    return table


def matchup_table(report: MatchupReport, *, label: str) -> Table:
    """Row-vs-column win rates; the row plays as team 1."""
    table = Table(
        title=f"2v2 Win Rates {label} (row vs column)",
        show_header=True,
        header_style="bold yellow",
    )
    table.add_column("")
    for name in report.names:
        table.add_column(name, justify="right")
    for row in report.names:
        cells = []
        for column in report.names:
            rate = report.win_rate(row, column)
            cells.append("-" if rate is None else f"{rate:.1f}%")
        table.add_row(row, *cells)
    return table


def ranking_table(report: MatchupReport, *, label: str) -> Table:
    table = Table(
        title=f"Overall Team Power Ranking {label}",
        show_header=True,
        header_style="bold yellow",
    )
    table.add_column("#", justify="right")
    table.add_column("Team")
    table.add_column("Win%", justify="right")
    table.add_column("")
    for position, (name, rate) in enumerate(report.ranking(), start=1):
        table.add_row(str(position), name, f"{rate:.1f}%", "█" * int(rate / 2))
    return table


def results_table(results: SimulationResults, team1: str, team2: str) -> Table:
    table = Table(title=f"{team1} vs {team2}", show_header=True, header_style="bold yellow")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Simulations", str(results.num_simulations))
    table.add_row(f"{team1} wins", f"{results.team1_wins} ({results.team1_win_rate:.1f}%)")
    table.add_row(f"{team2} wins", f"{results.team2_wins} ({results.team2_win_rate:.1f}%)")
    table.add_row("Draws", f"{results.draws} ({results.draw_rate:.1f}%)")
    table.add_row("Avg. rounds", f"{results.avg_rounds:.2f}")
    return table


def parse_team(roster: str, *, equipped: bool) -> list[CharacterFactory]:
    """Turn ``"fighter,wizard"`` into factories."""
    return [get_factory(part, equipped=equipped) for part in roster.split(",") if part.strip()]


# =============================================================================
# COMMANDS
# =============================================================================


def cmd_cards(args: argparse.Namespace) -> int:
    """Card usage analysis over every pairing of the reference teams."""
    stats = run_card_analysis(
        card_analysis_compositions(),
        args.simulations,
        seed=args.seed,
        workers=args.workers,
    )
    console.print(card_stats_table(stats, types=True))
    console.print(card_stats_table(stats, types=False))
    return 0


def cmd_teams(args: argparse.Namespace) -> int:
    """Matchup matrix and ranking of the reference teams."""
    label = "without equipment" if args.naked else "with equipment"
    report = run_matchup_matrix(
        default_compositions(equipped=not args.naked),
        args.simulations,
        seed=args.seed,
        workers=args.workers,
    )
    console.print(matchup_table(report, label=label))
    console.print(ranking_table(report, label=label))
    return 0


def cmd_duel(args: argparse.Namespace) -> int:
    """Simulate one pairing of ad-hoc teams."""
    team1 = parse_team(args.team1, equipped=not args.naked)
    team2 = parse_team(args.team2, equipped=not args.naked)
    results = run_simulation(
        team1,
        team2,
        args.simulations,
        verbose=args.verbose,
        seed=args.seed,
        workers=args.workers,
    )
    console.print(results_table(results, args.team1, args.team2))
    if args.stats:
        console.print(card_stats_table(results.stats, types=False))
    return 0


def cmd_all(args: argparse.Namespace) -> int:
    """Card analysis followed by the equipped matchup matrix."""
    args.naked = False
    status = cmd_cards(args)
    return status or cmd_teams(args)


COMMANDS: dict[str, Callable[[argparse.Namespace], int]] = {
    "cards": cmd_cards,
    "teams": cmd_teams,
    "duel": cmd_duel,
    "all": cmd_all,
}


# =============================================================================
# ENTRY POINT
# =============================================================================


def _add_simulation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--simulations", "-n", type=int, default=None, help="Combats per pairing"
    )
    parser.add_argument("--seed", "-s", type=int, default=None, help="Base seed")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Worker processes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pimpampum",
        description="Pim Pam Pum combat simulation engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s cards --simulations 300
  %(prog)s teams --naked --seed 7
  %(prog)s duel fighter,wizard goblin,goblin_shaman -n 1000
        """,
    )
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    cards_parser = subparsers.add_parser("cards", help="Card usage analysis")
    _add_simulation_options(cards_parser)

    teams_parser = subparsers.add_parser("teams", help="2v2 matchup matrix and ranking")
    _add_simulation_options(teams_parser)
    teams_parser.add_argument("--naked", action="store_true", help="Strip all equipment")

    duel_parser = subparsers.add_parser("duel", help="Simulate two ad-hoc teams")
    duel_parser.add_argument("team1", help="Comma-separated classes, e.g. fighter,wizard")
    duel_parser.add_argument("team2", help="Comma-separated classes, e.g. goblin,goblin_shaman")
    _add_simulation_options(duel_parser)
    duel_parser.add_argument("--naked", action="store_true", help="Strip all equipment")
    duel_parser.add_argument("--verbose", "-v", action="store_true", help="Narrate every combat")
    duel_parser.add_argument("--stats", action="store_true", help="Print card statistics")

    all_parser = subparsers.add_parser("all", help="Card analysis and matchup matrix")
    _add_simulation_options(all_parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = get_settings()
    level = args.log_level or settings.log_level
    if getattr(args, "verbose", False) and args.log_level is None:
        level = "INFO"
    configure_logging(
        level=level,
        json_format=args.json_logs or settings.json_logs,
        app_name=settings.app_name,
        app_version=settings.app_version,
    )

    handler = COMMANDS[args.command]
    try:
        return handler(args)
    except PimPamPumError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
