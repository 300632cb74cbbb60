"""Tests for cards, card categories and effects."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from pimpampum.core.exceptions import ValidationError
from pimpampum.models.card import Card
from pimpampum.models.dice import DiceRoll
from pimpampum.models.effects import (
    NO_EFFECT,
    DefendMultiple,
    DefenseBoostDuration,
    MultiTarget,
    NoEffect,
    SpecialEffect,
    StrengthBoost,
    Stun,
)
from pimpampum.models.enums import CardType, ModifierDuration


class TestCardType:
    """Tests for derived card category predicates."""

    @pytest.mark.parametrize(
        ("card_type", "attack", "defense", "physical", "focus"),
        [
            (CardType.PHYSICAL_ATTACK, True, False, True, False),
            (CardType.MAGIC_ATTACK, True, False, False, False),
            (CardType.DEFENSE, False, True, False, False),
            (CardType.FOCUS, False, False, False, True),
            (CardType.PHYSICAL_DEFENSE, True, True, True, False),
        ],
    )
    def test_predicates(
        self,
        card_type: CardType,
        attack: bool,
        defense: bool,
        physical: bool,
        focus: bool,
    ) -> None:
        """Test each category's attack, defense, physical and focus flags."""
        assert card_type.is_attack is attack
        assert card_type.is_defense is defense
        assert card_type.is_physical is physical
        assert card_type.is_focus is focus

    def test_labels(self) -> None:
        """Test the values used as statistics labels."""
        assert str(CardType.PHYSICAL_ATTACK) == "PhysicalAttack"
        assert str(CardType.PHYSICAL_DEFENSE) == "PhysicalDefense"


class TestModifierDuration:
    """Tests for duration decay at round boundaries."""

    @pytest.mark.parametrize(
        ("duration", "expected"),
        [
            (ModifierDuration.THIS_TURN, None),
            (ModifierDuration.NEXT_TURN, None),
            (ModifierDuration.THIS_AND_NEXT_TURN, ModifierDuration.NEXT_TURN),
            (ModifierDuration.REST_OF_COMBAT, ModifierDuration.REST_OF_COMBAT),
        ],
    )
    def test_advance(
        self, duration: ModifierDuration, expected: ModifierDuration | None
    ) -> None:
        """Test the duration after one boundary."""
        assert duration.advance() is expected


class TestEffects:
    """Tests for the special effect union."""

    def test_discriminated_validation(self) -> None:
        """Test that plain data validates to the matching variant."""
        adapter = TypeAdapter(SpecialEffect)

        effect = adapter.validate_python({"kind": "defend_multiple", "count": 2})

        assert effect == DefendMultiple(count=2)

    def test_nested_dice(self) -> None:
        """Test that effects with dice validate their payload."""
        adapter = TypeAdapter(SpecialEffect)

        effect = adapter.validate_python(
            {"kind": "defense_boost_duration", "dice": {"count": 1, "sides": 4}, "turns": 2}
        )

        assert isinstance(effect, DefenseBoostDuration)
        assert effect.dice == DiceRoll.parse("1d4")

    def test_unknown_kind_rejected(self) -> None:
        """Test that unknown kinds fail validation."""
        with pytest.raises(PydanticValidationError):
            TypeAdapter(SpecialEffect).validate_python({"kind": "teleport"})

    @pytest.mark.parametrize("turns", [0, 3])
    def test_boost_turns_bounds(self, turns: int) -> None:
        """Test that boost durations are one or two rounds."""
        with pytest.raises(PydanticValidationError):
            DefenseBoostDuration(dice=DiceRoll.parse("1d4"), turns=turns)

    def test_multi_target_needs_count(self) -> None:
        """Test that multi-target counts start at one."""
        with pytest.raises(PydanticValidationError):
            MultiTarget(count=0)

    def test_effects_hashable_and_equal(self) -> None:
        """Test frozen variants compare by value."""
        assert StrengthBoost(amount=2) == StrengthBoost(amount=2)
        assert hash(Stun()) == hash(Stun())


class TestCard:
    """Tests for the Card model."""

    def test_defaults(self) -> None:
        """Test a minimal card."""
        card = Card(name="Pas", card_type=CardType.FOCUS)

        assert card.effect == NO_EFFECT
        assert isinstance(card.effect, NoEffect)
        assert card.speed_modifier == 0
        assert card.attack_dice is None

    def test_empty_name_rejected(self) -> None:
        """Test that a card needs a name."""
        with pytest.raises(PydanticValidationError):
            Card(name="", card_type=CardType.FOCUS)

    def test_extra_fields_rejected(self) -> None:
        """Test that unknown fields are rejected."""
        with pytest.raises(PydanticValidationError):
            Card(name="Pas", card_type=CardType.FOCUS, mana=3)  # type: ignore[call-arg]

    def test_effect_from_dict(self) -> None:
        """Test that effects validate from plain data on the card."""
        card = Card.model_validate(
            {"name": "Escombrada", "card_type": "PhysicalAttack", "effect": {"kind": "multi_target", "count": 2}}
        )

        assert card.effect == MultiTarget(count=2)
        assert card.card_type is CardType.PHYSICAL_ATTACK

    def test_attack_dice_follows_category(self, make_card: Callable[..., Card]) -> None:
        """Test physical cards roll physical dice, others magic dice."""
        physical = make_card(physical="1d6")
        magic = make_card("Foc", CardType.MAGIC_ATTACK, magic="1d8")
        bash = make_card("Cop d'escut", CardType.PHYSICAL_DEFENSE, physical="1d4", defense="1d4")

        assert physical.attack_dice == DiceRoll.parse("1d6")
        assert magic.attack_dice == DiceRoll.parse("1d8")
        assert bash.attack_dice == DiceRoll.parse("1d4")

    @pytest.mark.parametrize(
        ("card_type", "field_name", "notation"),
        [
            (CardType.PHYSICAL_ATTACK, "magic_attack", "1d8"),
            (CardType.MAGIC_ATTACK, "physical_attack", "1d6"),
            (CardType.FOCUS, "defense", "1d4"),
            (CardType.PHYSICAL_ATTACK, "defense", "1d4"),
            (CardType.DEFENSE, "physical_attack", "1d4"),
        ],
    )
    def test_misplaced_dice_rejected(
        self, card_type: CardType, field_name: str, notation: str
    ) -> None:
        """Test dice that the category never rolls are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Card(name="X", card_type=card_type, **{field_name: DiceRoll.parse(notation)})

        assert exc_info.value.details == {"field_name": field_name, "invalid_value": notation}

    def test_shield_bash_carries_both(self) -> None:
        """Test a physical defense card may carry attack and defense dice."""
        card = Card(
            name="Cop d'escut",
            card_type=CardType.PHYSICAL_DEFENSE,
            physical_attack=DiceRoll.parse("1d4"),
            defense=DiceRoll.parse("1d6"),
        )

        assert card.is_attack and card.is_defense

    def test_reference_hands_are_consistent(self) -> None:
        """Test every reference character's cards pass validation."""
        from pimpampum.content.characters import CHARACTER_FACTORIES

        for factory in CHARACTER_FACTORIES.values():
            assert factory("X").cards
