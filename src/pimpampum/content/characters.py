"""Reference character factories.

Each class has an equipped factory and a ``_naked`` variant with the same
stats and hand but no equipment. Every factory is a module-level function
from a name to a fresh Character, so it can be shipped to worker processes.

Example:
    >>> fighter = create_fighter("Brienne")
    >>> fighter.character_class
    'Fighter'
"""

from __future__ import annotations

from collections.abc import Callable

from pimpampum.content.equipment import create_armadura_de_cuir, create_bracals_de_cuir
from pimpampum.core.exceptions import ValidationError
from pimpampum.engine.character import Character
from pimpampum.models.card import Card
from pimpampum.models.dice import DiceRoll
from pimpampum.models.effects import (
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
    MagicBoost,
    MultiTarget,
    PoisonWeapon,
    Sacrifice,
    SkipNextTurns,
    StrengthBoost,
    Stun,
    TeamSpeedDefenseBoost,
    Vengeance,
)
from pimpampum.models.enums import CardType


CharacterFactory = Callable[[str], Character]


def _dice(notation: str) -> DiceRoll:
    return DiceRoll.parse(notation)


# =============================================================================
# Card Hands
# =============================================================================


def fighter_cards() -> tuple[Card, ...]:
    return (
        Card(
            name="Espasa llarga",
            card_type=CardType.PHYSICAL_ATTACK,
            physical_attack=_dice("1d8"),
            speed_modifier=-2,
            effect=Stun(),
            description="A heavy swing that leaves the target stunned.",
        ),
        Card(
            name="Sacrifici",
            card_type=CardType.DEFENSE,
            speed_modifier=4,
            effect=Sacrifice(),
            description="Intercept every attack aimed at an ally.",
        ),
        Card(
            name="Ràbia traumada",
            card_type=CardType.FOCUS,
            speed_modifier=-3,
            effect=StrengthBoost(amount=4),
        ),
        Card(
            name="Embestida",
            card_type=CardType.PHYSICAL_ATTACK,
            physical_attack=_dice("1d6"),
            speed_modifier=2,
            effect=Embestida(),
        ),
        Card(
            name="Crit de guerra",
            card_type=CardType.PHYSICAL_ATTACK,
            physical_attack=_dice("1d4"),
            speed_modifier=1,
            effect=AllyStrengthThisTurn(amount=2),
        ),
        Card(
            name="Formació defensiva",
            card_type=CardType.FOCUS,
            speed_modifier=2,
            effect=DefenseBoostDuration(dice=_dice("1d4"), turns=2),
        ),
    )


def wizard_cards() -> tuple[Card, ...]:
    return (
        Card(
            name="Pantalla protectora",
            card_type=CardType.DEFENSE,
            defense=_dice("1d6"),
            speed_modifier=-1,
            effect=DefendMultiple(count=3),
        ),
        Card(
            name="Bola de foc",
            card_type=CardType.MAGIC_ATTACK,
            magic_attack=_dice("1d6"),
            speed_modifier=1,
        ),
        Card(
            name="Raig de gel",
            card_type=CardType.MAGIC_ATTACK,
            magic_attack=_dice("1d4"),
            speed_modifier=1,
            effect=EnemySpeedDebuff(amount=2),
        ),
        Card(
            name="Metamorfosi",
            card_type=CardType.FOCUS,
            speed_modifier=-2,
        ),
        Card(
            name="Encantar arma",
            card_type=CardType.FOCUS,
            speed_modifier=2,
            effect=EnchantWeapon(),
        ),
        Card(
            name="Camp de distorsió",
            card_type=CardType.FOCUS,
            speed_modifier=-1,
            effect=TeamSpeedDefenseBoost(),
        ),
    )


def rogue_cards() -> tuple[Card, ...]:
    return (
        Card(
            name="Emboscada coordinada",
            card_type=CardType.FOCUS,
            speed_modifier=4,
            effect=CoordinatedAmbush(),
        ),
        Card(
            name="Fum cegador",
            card_type=CardType.FOCUS,
            speed_modifier=3,
            effect=BlindingSmoke(),
        ),
        Card(
            name="Braçals de cuir",
            card_type=CardType.DEFENSE,
            defense=_dice("1d4"),
            speed_modifier=2,
        ),
        Card(
            name="Ballesta",
            card_type=CardType.PHYSICAL_ATTACK,
            physical_attack=_dice("1d6"),
            speed_modifier=3,
        ),
        Card(
            name="Dagues",
            card_type=CardType.PHYSICAL_ATTACK,
            physical_attack=_dice("1d4"),
            speed_modifier=3,
            effect=MultiTarget(count=2),
        ),
        Card(
            name="El·lusió",
            card_type=CardType.FOCUS,
            speed_modifier=3,
            effect=DodgeWithSpeedBoost(),
        ),
        Card(
            name="Enverinar arma",
            card_type=CardType.FOCUS,
            effect=PoisonWeapon(),
        ),
    )


def goblin_cards() -> tuple[Card, ...]:
    return (
        Card(
            name="Fúria enfollida",
            card_type=CardType.PHYSICAL_ATTACK,
            physical_attack=_dice("2d6"),
            speed_modifier=5,
            effect=SkipNextTurns(count=2),
        ),
        Card(
            name="Maça de punxes",
            card_type=CardType.PHYSICAL_ATTACK,
            physical_attack=_dice("1d6"),
            speed_modifier=1,
        ),
        Card(
            name="Escut de fusta",
            card_type=CardType.DEFENSE,
            defense=_dice("1d6"),
            speed_modifier=2,
        ),
        Card(
            name="Venjança",
            card_type=CardType.FOCUS,
            speed_modifier=1,
            effect=Vengeance(),
        ),
    )


def goblin_shaman_cards() -> tuple[Card, ...]:
    return (
        Card(
            name="Llamp",
            card_type=CardType.MAGIC_ATTACK,
            magic_attack=_dice("2d4"),
        ),
        Card(
            name="Possessió demoníaca",
            card_type=CardType.FOCUS,
            speed_modifier=-4,
            effect=MagicBoost(amount=5),
        ),
        Card(
            name="Set de sang",
            card_type=CardType.FOCUS,
            speed_modifier=-3,
            effect=BloodThirst(),
        ),
        Card(
            name="Pluja de flames",
            card_type=CardType.MAGIC_ATTACK,
            magic_attack=_dice("1d4-1"),
            speed_modifier=-1,
            effect=MultiTarget(count=3),
        ),
        Card(
            name="Absorvir dolor",
            card_type=CardType.DEFENSE,
            defense=_dice("1d4"),
            speed_modifier=1,
            effect=AbsorbPain(),
        ),
    )


# =============================================================================
# Character Factories
# =============================================================================


def create_fighter_naked(name: str) -> Character:
    return Character(
        name=name,
        max_wounds=3,
        strength=3,
        magic=0,
        defense=2,
        speed=2,
        cards=fighter_cards(),
        character_class="Fighter",
    )


def create_fighter(name: str) -> Character:
    """Fighter in leather armour and bracers."""
    character = create_fighter_naked(name)
    character.equip(create_armadura_de_cuir())
    character.equip(create_bracals_de_cuir())
    return character


def create_wizard_naked(name: str) -> Character:
    return Character(
        name=name,
        max_wounds=3,
        strength=0,
        magic=5,
        defense=1,
        speed=2,
        cards=wizard_cards(),
        character_class="Wizard",
    )


def create_wizard(name: str) -> Character:
    """Wizard in leather bracers."""
    character = create_wizard_naked(name)
    character.equip(create_bracals_de_cuir())
    return character


def create_rogue_naked(name: str) -> Character:
    return Character(
        name=name,
        max_wounds=3,
        strength=2,
        magic=0,
        defense=1,
        speed=4,
        cards=rogue_cards(),
        character_class="Rogue",
    )


def create_rogue(name: str) -> Character:
    """Rogue in leather armour."""
    character = create_rogue_naked(name)
    character.equip(create_armadura_de_cuir())
    return character


def create_goblin_naked(name: str) -> Character:
    return Character(
        name=name,
        max_wounds=3,
        strength=2,
        magic=0,
        defense=1,
        speed=3,
        cards=goblin_cards(),
        character_class="Goblin",
    )


def create_goblin(name: str) -> Character:
    """Goblin in leather bracers."""
    character = create_goblin_naked(name)
    character.equip(create_bracals_de_cuir())
    return character


def create_goblin_shaman_naked(name: str) -> Character:
    return Character(
        name=name,
        max_wounds=3,
        strength=1,
        magic=4,
        defense=0,
        speed=2,
        cards=goblin_shaman_cards(),
        character_class="Goblin Shaman",
    )


def create_goblin_shaman(name: str) -> Character:
    """The goblin shaman fights without equipment."""
    return create_goblin_shaman_naked(name)


# =============================================================================
# Registry
# =============================================================================

CHARACTER_FACTORIES: dict[str, CharacterFactory] = {
    "fighter": create_fighter,
    "wizard": create_wizard,
    "rogue": create_rogue,
    "goblin": create_goblin,
    "goblin_shaman": create_goblin_shaman,
}

NAKED_CHARACTER_FACTORIES: dict[str, CharacterFactory] = {
    "fighter": create_fighter_naked,
    "wizard": create_wizard_naked,
    "rogue": create_rogue_naked,
    "goblin": create_goblin_naked,
    "goblin_shaman": create_goblin_shaman_naked,
}


def get_factory(class_id: str, *, equipped: bool = True) -> CharacterFactory:
    """Look up a character factory by class ID.

    Args:
        class_id: Class ID such as 'fighter' or 'goblin_shaman'. Case and
            hyphens are ignored.
        equipped: Return the equipped factory rather than the naked one.

    Returns:
        The factory function.

    Raises:
        ValidationError: If the class ID is unknown.
    """
    key = class_id.strip().lower().replace("-", "_").replace(" ", "_")
    registry = CHARACTER_FACTORIES if equipped else NAKED_CHARACTER_FACTORIES
    factory = registry.get(key)
    if factory is None:
        raise ValidationError(
            f"Unknown character class: {class_id}",
            field_name="class_id",
            invalid_value=class_id,
        )
    return factory


__all__ = [
    "CharacterFactory",
    "fighter_cards",
    "wizard_cards",
    "rogue_cards",
    "goblin_cards",
    "goblin_shaman_cards",
    "create_fighter",
    "create_fighter_naked",
    "create_wizard",
    "create_wizard_naked",
    "create_rogue",
    "create_rogue_naked",
    "create_goblin",
    "create_goblin_naked",
    "create_goblin_shaman",
    "create_goblin_shaman_naked",
    "CHARACTER_FACTORIES",
    "NAKED_CHARACTER_FACTORIES",
    "get_factory",
]
