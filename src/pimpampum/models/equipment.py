"""Passive equipment worn by characters."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pimpampum.models.dice import DiceRoll, DiceSource
from pimpampum.models.enums import EquipmentSlot, Stat


class Equipment(BaseModel):
    """An item that adjusts its wearer's stats while equipped.

    Defense from dice is re-rolled every time the wearer's defense is
    resolved.

    Attributes:
        name: Display name.
        slot: Body slot; equipping into an occupied slot replaces the item.
        defense_flat: Flat defense bonus.
        defense_dice: Optional defense dice.
        speed: Speed adjustment (armour is usually negative).
        strength: Strength adjustment.
        magic: Magic adjustment.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(min_length=1, description="Item name")
    slot: EquipmentSlot = Field(description="Body slot")
    defense_flat: int = Field(default=0, description="Flat defense bonus")
    defense_dice: DiceRoll | None = Field(default=None, description="Defense dice")
    speed: int = Field(default=0, description="Speed adjustment")
    strength: int = Field(default=0, description="Strength adjustment")
    magic: int = Field(default=0, description="Magic adjustment")

    def contribution(self, stat: Stat, source: DiceSource) -> int:
        """Resolve this item's contribution to a stat.

        Args:
            stat: Stat being resolved.
            source: Random source for defense dice.

        Returns:
            The item's bonus for that stat.
        """
        match stat:
            case Stat.DEFENSE:
                rolled = self.defense_dice.roll(source) if self.defense_dice else 0
                return self.defense_flat + rolled
            case Stat.SPEED:
                return self.speed
            case Stat.STRENGTH:
                return self.strength
            case Stat.MAGIC:
                return self.magic
            case _:
                return 0


__all__ = [
    "Equipment",
]
