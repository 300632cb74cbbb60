"""Reference game content: equipment presets and character factories.

Submodules:
    equipment: Armour presets
    characters: Card hands and character factories
"""

from __future__ import annotations

from pimpampum.content.equipment import (
    EQUIPMENT_PRESETS,
    create_armadura_de_cuir,
    create_armadura_de_ferro,
    create_bracals_de_cuir,
    create_cota_de_malla,
    create_equipment,
)
from pimpampum.content.characters import (
    CHARACTER_FACTORIES,
    NAKED_CHARACTER_FACTORIES,
    CharacterFactory,
    create_fighter,
    create_fighter_naked,
    create_goblin,
    create_goblin_naked,
    create_goblin_shaman,
    create_goblin_shaman_naked,
    create_rogue,
    create_rogue_naked,
    create_wizard,
    create_wizard_naked,
    get_factory,
)


__all__ = [
    # Equipment
    "EQUIPMENT_PRESETS",
    "create_equipment",
    "create_armadura_de_ferro",
    "create_cota_de_malla",
    "create_armadura_de_cuir",
    "create_bracals_de_cuir",
    # Characters
    "CharacterFactory",
    "CHARACTER_FACTORIES",
    "NAKED_CHARACTER_FACTORIES",
    "get_factory",
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
]
