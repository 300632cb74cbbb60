"""Tests for reference characters and equipment presets."""

from __future__ import annotations

import pytest

from pimpampum.content.characters import (
    CHARACTER_FACTORIES,
    NAKED_CHARACTER_FACTORIES,
    CharacterFactory,
    create_fighter,
    create_fighter_naked,
    create_goblin_shaman,
    create_rogue,
    get_factory,
)
from pimpampum.content.equipment import EQUIPMENT_PRESETS, create_cota_de_malla, create_equipment
from pimpampum.core.exceptions import ValidationError
from pimpampum.engine.dice import DiceRoller
from pimpampum.models.dice import DiceRoll
from pimpampum.models.enums import CardType, EquipmentSlot, Stat


class TestEquipmentPresets:
    """Tests for equipment presets."""

    @pytest.mark.parametrize("item_id", sorted(EQUIPMENT_PRESETS))
    def test_every_preset_builds(self, item_id: str) -> None:
        """Test every preset validates as Equipment."""
        item = create_equipment(item_id)

        assert item.name == EQUIPMENT_PRESETS[item_id]["name"]

    def test_unknown_preset(self) -> None:
        """Test unknown IDs raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            create_equipment("mithril")

        assert exc_info.value.details["invalid_value"] == "mithril"

    def test_chain_mail(self) -> None:
        """Test chain mail rolls its defense and slows the wearer."""
        item = create_cota_de_malla()

        assert item.slot is EquipmentSlot.TORSO
        assert item.defense_dice == DiceRoll.parse("1d4")
        assert item.speed == -2


class TestCharacterFactories:
    """Tests for the reference classes."""

    @pytest.mark.parametrize(
        ("class_id", "stats"),
        [
            ("fighter", (3, 3, 0, 2, 2)),
            ("wizard", (3, 0, 5, 1, 2)),
            ("rogue", (3, 2, 0, 1, 4)),
            ("goblin", (3, 2, 0, 1, 3)),
            ("goblin_shaman", (3, 1, 4, 0, 2)),
        ],
    )
    def test_base_stats(self, class_id: str, stats: tuple[int, ...]) -> None:
        """Test wounds, strength, magic, defense and speed per class."""
        character = NAKED_CHARACTER_FACTORIES[class_id]("X")

        assert (
            character.max_wounds,
            character.strength,
            character.magic,
            character.defense,
            character.speed,
        ) == stats
        assert character.equipment == {}

    @pytest.mark.parametrize("class_id", sorted(CHARACTER_FACTORIES))
    def test_fresh_instances(self, class_id: str) -> None:
        """Test each call builds an independent character with its name."""
        factory = CHARACTER_FACTORIES[class_id]

        first, second = factory("A"), factory("B")

        assert first is not second
        assert first.name == "A"
        assert first.cards
        assert first.modifiers is not second.modifiers

    def test_fighter_equipment(self) -> None:
        """Test the fighter wears leather armour and bracers."""
        fighter = create_fighter("F")
        roller = DiceRoller(seed=1)

        assert set(fighter.equipment) == {EquipmentSlot.TORSO, EquipmentSlot.ARMS}
        assert fighter.resolve_stat(Stat.DEFENSE, roller).total == 5
        assert fighter.resolve_stat(Stat.SPEED, roller).total == 1

    def test_naked_variant_shares_hand(self) -> None:
        """Test the naked variant keeps stats and cards."""
        assert create_fighter_naked("N").cards == create_fighter("E").cards

    def test_rogue_hand(self) -> None:
        """Test the rogue's hand composition."""
        rogue = create_rogue("R")
        types = [card.card_type for card in rogue.cards]

        assert len(rogue.cards) == 7
        assert types.count(CardType.FOCUS) == 4
        assert {card.name for card in rogue.cards} >= {"Dagues", "Enverinar arma"}

    def test_shaman_label(self) -> None:
        """Test the shaman's class label and bare build."""
        shaman = create_goblin_shaman("S")

        assert shaman.character_class == "Goblin Shaman"
        assert shaman.equipment == {}

    def test_card_names_unique_per_hand(self) -> None:
        """Test card names are unique within each hand."""
        for factory in CHARACTER_FACTORIES.values():
            names = [card.name for card in factory("X").cards]
            assert len(names) == len(set(names))


class TestGetFactory:
    """Tests for factory lookup."""

    @pytest.mark.parametrize(
        "class_id",
        ["goblin_shaman", "Goblin-Shaman", " goblin shaman ", "GOBLIN_SHAMAN"],
    )
    def test_normalized_lookup(self, class_id: str) -> None:
        """Test case, hyphens and spaces are ignored."""
        assert get_factory(class_id) is create_goblin_shaman

    def test_naked_lookup(self) -> None:
        """Test the naked registry is selectable."""
        factory: CharacterFactory = get_factory("fighter", equipped=False)

        assert factory is create_fighter_naked

    def test_unknown_class(self) -> None:
        """Test unknown classes raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            get_factory("bard")

        assert exc_info.value.details["field_name"] == "class_id"
