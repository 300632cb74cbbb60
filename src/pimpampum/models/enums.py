"""Enumeration types for the Pim Pam Pum ruleset.

Card categories, equipment slots, modifier lifetimes and the stats that
modifiers can target. Card category predicates are derived here and never
stored on cards.
"""

from __future__ import annotations

from enum import StrEnum


class CardType(StrEnum):
    """Category of a playable card.

    The value doubles as the label used in card-type statistics.
    """

    PHYSICAL_ATTACK = "PhysicalAttack"
    MAGIC_ATTACK = "MagicAttack"
    DEFENSE = "Defense"
    FOCUS = "Focus"
    PHYSICAL_DEFENSE = "PhysicalDefense"

    @property
    def is_attack(self) -> bool:
        """Whether playing the card makes an attack contest."""
        return self in (
            CardType.PHYSICAL_ATTACK,
            CardType.MAGIC_ATTACK,
            CardType.PHYSICAL_DEFENSE,
        )

    @property
    def is_defense(self) -> bool:
        """Whether the card grants or redirects defense."""
        return self in (CardType.DEFENSE, CardType.PHYSICAL_DEFENSE)

    @property
    def is_physical(self) -> bool:
        """Whether attacks made with the card use strength (and poison)."""
        return self in (CardType.PHYSICAL_ATTACK, CardType.PHYSICAL_DEFENSE)

    @property
    def is_focus(self) -> bool:
        """Whether the card is a delayed, interruptible Focus action."""
        return self is CardType.FOCUS


class EquipmentSlot(StrEnum):
    """Body slot an equipment item occupies. One item per slot."""

    TORSO = "torso"
    ARMS = "arms"
    HEAD = "head"
    LEGS = "legs"
    MAIN_HAND = "main_hand"
    OFF_HAND = "off_hand"


class Stat(StrEnum):
    """Stats that modifiers and equipment can adjust."""

    SPEED = "speed"
    STRENGTH = "strength"
    MAGIC = "magic"
    DEFENSE = "defense"
    ATTACK_BONUS = "attack_bonus"


class ModifierDuration(StrEnum):
    """Lifetime of a stat modifier, measured in round boundaries."""

    THIS_TURN = "this_turn"
    NEXT_TURN = "next_turn"
    THIS_AND_NEXT_TURN = "this_and_next_turn"
    REST_OF_COMBAT = "rest_of_combat"

    def advance(self) -> ModifierDuration | None:
        """Return the duration after one round boundary.

        Returns:
            The decayed duration, or None if the modifier expires.
        """
        if self is ModifierDuration.THIS_AND_NEXT_TURN:
            return ModifierDuration.NEXT_TURN
        if self is ModifierDuration.REST_OF_COMBAT:
            return self
        return None


__all__ = [
    "CardType",
    "EquipmentSlot",
    "Stat",
    "ModifierDuration",
]
