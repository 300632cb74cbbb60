"""Playable cards.

A card is immutable once built. Its category decides how the engine
resolves it; its effect adds one special behaviour on top.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pimpampum.core.exceptions import ValidationError
from pimpampum.models.dice import DiceRoll
from pimpampum.models.effects import NO_EFFECT, SpecialEffect
from pimpampum.models.enums import CardType


class Card(BaseModel):
    """A card in a character's fixed hand.

    Attributes:
        name: Display name; also the key for per-card statistics.
        card_type: Category driving resolution.
        physical_attack: Attack dice for physical cards.
        magic_attack: Attack dice for magic cards.
        defense: Defense dice granted by defense cards.
        speed_modifier: Added to the owner's speed when ordering the round.
        effect: The card's single special effect.
        description: Flavour text.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(min_length=1, description="Card name")
    card_type: CardType = Field(description="Card category")
    physical_attack: DiceRoll | None = Field(default=None, description="Physical attack dice")
    magic_attack: DiceRoll | None = Field(default=None, description="Magic attack dice")
    defense: DiceRoll | None = Field(default=None, description="Defense dice")
    speed_modifier: int = Field(default=0, description="Speed modifier while played")
    effect: SpecialEffect = Field(default=NO_EFFECT, description="Special effect")
    description: str = Field(default="", description="Flavour text")

    @property
    def is_attack(self) -> bool:
        return self.card_type.is_attack

    @property
    def is_defense(self) -> bool:
        return self.card_type.is_defense

    @property
    def is_physical(self) -> bool:
        return self.card_type.is_physical

    @property
    def is_focus(self) -> bool:
        return self.card_type.is_focus

    @property
    def attack_dice(self) -> DiceRoll | None:
        """Dice rolled when this card attacks.

        Physical cards roll their physical dice, everything else its magic
        dice.
        """
        return self.physical_attack if self.is_physical else self.magic_attack

    @model_validator(mode="after")
    def validate_dice_category(self) -> "Card":
        """Ensure every dice payload belongs to the card's category.

        Physical dice need a physical card and magic dice a magic attack.
        Defense dice need a defense card.

        Returns:
            Self if validation passes.

        Raises:
            ValidationError: If a dice field does not fit the category.
        """
        misplaced = [
            field_name
            for field_name, dice, allowed in (
                ("physical_attack", self.physical_attack, self.is_physical),
                ("magic_attack", self.magic_attack, self.card_type is CardType.MAGIC_ATTACK),
                ("defense", self.defense, self.is_defense),
            )
            if dice is not None and not allowed
        ]
        if misplaced:
            raise ValidationError(
                f"{self.card_type} card '{self.name}' cannot carry {misplaced[0]} dice",
                field_name=misplaced[0],
                invalid_value=str(getattr(self, misplaced[0])),
            )
        return self


__all__ = [
    "Card",
]
