"""Special effects carried by cards.

Every card carries exactly one effect from a closed set of variants. The
variants form a pydantic discriminated union on ``kind`` so cards can be
validated from plain data, and the combat interpreter matches on the
concrete classes exhaustively.

Example:
    >>> from pydantic import TypeAdapter
    >>> TypeAdapter(SpecialEffect).validate_python({"kind": "multi_target", "count": 2})
    MultiTarget(kind='multi_target', count=2)
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from pimpampum.models.dice import DiceRoll


class _Effect(BaseModel):
    """Common configuration for effect variants."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


# =============================================================================
# Attack Secondary Effects
# =============================================================================


class NoEffect(_Effect):
    kind: Literal["none"] = "none"


class Stun(_Effect):
    """Selected target's attack cards fizzle until end of round."""

    kind: Literal["stun"] = "stun"


class SkipNextTurn(_Effect):
    """Attacker sits out its next selection."""

    kind: Literal["skip_next_turn"] = "skip_next_turn"


class SkipNextTurns(_Effect):
    """Attacker sits out its next ``count`` selections."""

    kind: Literal["skip_next_turns"] = "skip_next_turns"
    count: int = Field(ge=1)


class EnemySpeedDebuff(_Effect):
    """Selected target loses speed next round."""

    kind: Literal["enemy_speed_debuff"] = "enemy_speed_debuff"
    amount: int = Field(ge=0)


class EnemyStrengthDebuff(_Effect):
    """Selected target loses strength next round."""

    kind: Literal["enemy_strength_debuff"] = "enemy_strength_debuff"
    amount: int = Field(ge=0)


class Embestida(_Effect):
    """Charge: target -2 speed and attacker -3 speed next round."""

    kind: Literal["embestida"] = "embestida"


class MultiTarget(_Effect):
    """Attack the first ``count`` living enemies."""

    kind: Literal["multi_target"] = "multi_target"
    count: int = Field(ge=1)


# =============================================================================
# Defense Effects
# =============================================================================


class Sacrifice(_Effect):
    """Redirect attacks on an ally to the card's owner."""

    kind: Literal["sacrifice"] = "sacrifice"


class DefendMultiple(_Effect):
    """Grant the defense to the first ``count`` living allies."""

    kind: Literal["defend_multiple"] = "defend_multiple"
    count: int = Field(ge=1)


class AbsorbPain(_Effect):
    """Owner gains permanent defense whenever its grant blocks an attack."""

    kind: Literal["absorb_pain"] = "absorb_pain"


# =============================================================================
# Focus Effects
# =============================================================================


class StrengthBoost(_Effect):
    kind: Literal["strength_boost"] = "strength_boost"
    amount: int = Field(ge=0)


class MagicBoost(_Effect):
    kind: Literal["magic_boost"] = "magic_boost"
    amount: int = Field(ge=0)


class AllyStrengthThisTurn(_Effect):
    """Other living allies gain strength for the current round."""

    kind: Literal["ally_strength_this_turn"] = "ally_strength_this_turn"
    amount: int = Field(ge=0)


class DefenseBoostDuration(_Effect):
    """Owner and one ally gain a defense dice modifier for ``turns`` rounds."""

    kind: Literal["defense_boost_duration"] = "defense_boost_duration"
    dice: DiceRoll
    turns: int = Field(ge=1, le=2)


class TeamSpeedDefenseBoost(_Effect):
    kind: Literal["team_speed_defense_boost"] = "team_speed_defense_boost"


class BlindingSmoke(_Effect):
    kind: Literal["blinding_smoke"] = "blinding_smoke"


class DodgeWithSpeedBoost(_Effect):
    kind: Literal["dodge_with_speed_boost"] = "dodge_with_speed_boost"


class CoordinatedAmbush(_Effect):
    kind: Literal["coordinated_ambush"] = "coordinated_ambush"


class Vengeance(_Effect):
    kind: Literal["vengeance"] = "vengeance"


class EnchantWeapon(_Effect):
    kind: Literal["enchant_weapon"] = "enchant_weapon"


class BloodThirst(_Effect):
    kind: Literal["blood_thirst"] = "blood_thirst"


class PoisonWeapon(_Effect):
    kind: Literal["poison_weapon"] = "poison_weapon"


SpecialEffect = Annotated[
    Union[
        NoEffect,
        Stun,
        SkipNextTurn,
        SkipNextTurns,
        StrengthBoost,
        MagicBoost,
        AllyStrengthThisTurn,
        DefenseBoostDuration,
        TeamSpeedDefenseBoost,
        EnemySpeedDebuff,
        EnemyStrengthDebuff,
        Embestida,
        BlindingSmoke,
        DodgeWithSpeedBoost,
        CoordinatedAmbush,
        Sacrifice,
        Vengeance,
        EnchantWeapon,
        BloodThirst,
        AbsorbPain,
        MultiTarget,
        DefendMultiple,
        PoisonWeapon,
    ],
    Field(discriminator="kind"),
]
"""Closed union of every card effect."""


NO_EFFECT = NoEffect()


__all__ = [
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
]
