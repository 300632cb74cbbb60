"""Equipment presets.

Contains the armour pieces worn by the reference characters.
"""

from __future__ import annotations

from typing import Any

from pimpampum.core.exceptions import ValidationError
from pimpampum.models.dice import DiceRoll
from pimpampum.models.enums import EquipmentSlot
from pimpampum.models.equipment import Equipment


# =============================================================================
# Armour Definitions
# =============================================================================

EQUIPMENT_PRESETS: dict[str, dict[str, Any]] = {
    "armadura_de_ferro": {
        "name": "Armadura de ferro",
        "slot": EquipmentSlot.TORSO,
        "defense_flat": 3,
        "speed": -3,
    },
    "cota_de_malla": {
        "name": "Cota de malla",
        "slot": EquipmentSlot.TORSO,
        "defense_dice": DiceRoll(count=1, sides=4),
        "speed": -2,
    },
    "armadura_de_cuir": {
        "name": "Armadura de cuir",
        "slot": EquipmentSlot.TORSO,
        "defense_flat": 2,
        "speed": -1,
    },
    "bracals_de_cuir": {
        "name": "Braçals de cuir",
        "slot": EquipmentSlot.ARMS,
        "defense_flat": 1,
    },
}


# =============================================================================
# Factory Functions
# =============================================================================


def create_equipment(item_id: str) -> Equipment:
    """Create an equipment item from a preset ID.

    Args:
        item_id: Preset ID (e.g. 'cota_de_malla').

    Returns:
        The equipment item.

    Raises:
        ValidationError: If the preset does not exist.
    """
    data = EQUIPMENT_PRESETS.get(item_id)
    if data is None:
        raise ValidationError(
            f"Unknown equipment preset: {item_id}",
            field_name="item_id",
            invalid_value=item_id,
        )
    return Equipment(**data)


def create_armadura_de_ferro() -> Equipment:
    return create_equipment("armadura_de_ferro")


def create_cota_de_malla() -> Equipment:
    return create_equipment("cota_de_malla")


def create_armadura_de_cuir() -> Equipment:
    return create_equipment("armadura_de_cuir")


def create_bracals_de_cuir() -> Equipment:
    return create_equipment("bracals_de_cuir")


__all__ = [
    "EQUIPMENT_PRESETS",
    "create_equipment",
    "create_armadura_de_ferro",
    "create_cota_de_malla",
    "create_armadura_de_cuir",
    "create_bracals_de_cuir",
]
