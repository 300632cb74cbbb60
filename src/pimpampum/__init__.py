"""Pim Pam Pum - card-driven team combat engine and balance simulator.

Two teams of characters pick cards every round; actions resolve in speed
order through a small rules interpreter, and the simulation runner repeats
combats to measure win rates and card effectiveness.

Example:
    >>> from pimpampum import create_fighter, create_goblin, run_simulation
    >>>
    >>> results = run_simulation([create_fighter], [create_goblin], 200, seed=3)
    >>> print(f"Fighter wins {results.team1_win_rate:.1f}% of duels")

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for dice, cards, effects and equipment.
    engine: Characters, selection policy and the combat round loop.
    content: Reference equipment presets and character factories.
    simulation: Monte Carlo runner and balance reports.
    cli: Console entry point.
"""

from __future__ import annotations

# Core
from pimpampum.core.config import Settings, get_settings
from pimpampum.core.exceptions import PimPamPumError
from pimpampum.core.logging import configure_logging, get_logger

# Models
from pimpampum.models import Card, CardType, DiceRoll, Equipment, EquipmentSlot

# Engine
from pimpampum.engine import (
    Character,
    CombatEngine,
    CombatOutcome,
    CombatStats,
    DiceRoller,
    Winner,
)

# Content
from pimpampum.content import (
    create_fighter,
    create_goblin,
    create_goblin_shaman,
    create_rogue,
    create_wizard,
)

# Simulation
from pimpampum.simulation import SimulationResults, run_simulation


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "PimPamPumError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Card",
    "CardType",
    "DiceRoll",
    "Equipment",
    "EquipmentSlot",
    # Engine
    "Character",
    "CombatEngine",
    "CombatOutcome",
    "CombatStats",
    "DiceRoller",
    "Winner",
    # Content
    "create_fighter",
    "create_wizard",
    "create_rogue",
    "create_goblin",
    "create_goblin_shaman",
    # Simulation
    "SimulationResults",
    "run_simulation",
]
