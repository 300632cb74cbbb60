"""Combat engine for Pim Pam Pum.

This module provides the rules interpreter: characters and their timed
modifiers, the card-selection heuristic, speed ordering and the round state
machine that resolves attacks, defenses and focus effects.

Submodules:
    dice: Seedable random source (DiceRoller)
    modifiers: Combatant handles, timed stat modifiers, defense grants
    character: Mutable combat participants and stat snapshots
    policy: Weighted card-selection heuristic
    turn_order: Speed ordering of a round's actions
    stats: Per-card usage counters
    combat: Round state machine and effect interpreter

Example:
    >>> from pimpampum.engine import CombatEngine, DiceRoller, Winner
    >>>
    >>> engine = CombatEngine(team1, team2, dice=DiceRoller(seed=42))
    >>> outcome = engine.run_combat()
    >>> if outcome.winner is Winner.DRAW:
    ...     print(f"Stalemate after {outcome.rounds} rounds")
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from pimpampum.engine.dice import DiceRoller, derive_seed

# =============================================================================
# Characters & Modifiers
# =============================================================================
from pimpampum.engine.modifiers import CombatantId, DefenseGrant, StatModifier
from pimpampum.engine.character import Character, StatSnapshot

# =============================================================================
# Card Selection
# =============================================================================
from pimpampum.engine.policy import (
    PASS_ACTION,
    CardSelectionPolicy,
    SelectionWeights,
    weighted_index,
)

# =============================================================================
# Rounds & Statistics
# =============================================================================
from pimpampum.engine.turn_order import ActionEntry, order_by_speed
from pimpampum.engine.stats import CardStats, CombatStats
from pimpampum.engine.combat import CombatEngine, CombatOutcome, RoundPhase, Winner


__all__ = [
    # Dice Rolling
    "DiceRoller",
    "derive_seed",
    # Characters & Modifiers
    "CombatantId",
    "StatModifier",
    "DefenseGrant",
    "Character",
    "StatSnapshot",
    # Card Selection
    "PASS_ACTION",
    "SelectionWeights",
    "CardSelectionPolicy",
    "weighted_index",
    # Rounds & Statistics
    "ActionEntry",
    "order_by_speed",
    "CardStats",
    "CombatStats",
    "RoundPhase",
    "Winner",
    "CombatOutcome",
    "CombatEngine",
]
