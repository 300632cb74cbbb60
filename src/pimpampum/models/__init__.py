"""Pydantic V2 schemas for cards, dice and equipment.

All content models are frozen: once a card, dice expression or equipment
item is built it never changes during a combat.

Submodules:
    enums: CardType, EquipmentSlot, Stat, ModifierDuration
    dice: DiceRoll expressions and the DiceSource protocol
    effects: Closed union of card special effects
    card: Playable cards
    equipment: Passive equipment items
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from pimpampum.models.enums import (
    CardType,
    EquipmentSlot,
    ModifierDuration,
    Stat,
)

# =============================================================================
# Dice
# =============================================================================
from pimpampum.models.dice import DiceRoll, DiceSource

# =============================================================================
# Effects
# =============================================================================
from pimpampum.models.effects import (
    NO_EFFECT,
    AbsorbPain,
    AllyStrengthThisTurn,
    BlindingSmoke,
    BloodThirst,
    CoordinatedAmbush,
    DefendMultiple,
    DefenseBoostDuration,
    DodgeWithSpeedBoost,
    Embestida,
    EnchantWeapon,
    EnemySpeedDebuff,
    EnemyStrengthDebuff,
    MagicBoost,
    MultiTarget,
    NoEffect,
    PoisonWeapon,
    Sacrifice,
    SkipNextTurn,
    SkipNextTurns,
    SpecialEffect,
    StrengthBoost,
    Stun,
    TeamSpeedDefenseBoost,
    Vengeance,
)

# =============================================================================
# Cards & Equipment
# =============================================================================
from pimpampum.models.card import Card
from pimpampum.models.equipment import Equipment


__all__ = [
    # Enumerations
    "CardType",
    "EquipmentSlot",
    "ModifierDuration",
    "Stat",
    # Dice
    "DiceRoll",
    "DiceSource",
    # Effects
    "SpecialEffect",
    "NO_EFFECT",
    "NoEffect",
    "Stun",
    "SkipNextTurn",
    "SkipNextTurns",
    "StrengthBoost",
    "MagicBoost",
    "AllyStrengthThisTurn",
    "DefenseBoostDuration",
    "TeamSpeedDefenseBoost",
    "EnemySpeedDebuff",
    "EnemyStrengthDebuff",
    "Embestida",
    "BlindingSmoke",
    "DodgeWithSpeedBoost",
    "CoordinatedAmbush",
    "Sacrifice",
    "Vengeance",
    "EnchantWeapon",
    "BloodThirst",
    "AbsorbPain",
    "MultiTarget",
    "DefendMultiple",
    "PoisonWeapon",
    # Cards & Equipment
    "Card",
    "Equipment",
]
