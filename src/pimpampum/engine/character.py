"""Mutable combat participants.

A Character carries its fixed build (stats, hand, equipment) plus the
combat-scoped state the engine mutates round by round. Effective stats are
only exposed through ``resolve_stat``, which evaluates every dice source
exactly once and returns a StatSnapshot the caller reuses for the whole
decision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pimpampum.core.exceptions import ValidationError
from pimpampum.engine.modifiers import CombatantId, DefenseGrant, StatModifier
from pimpampum.models.enums import EquipmentSlot, Stat


if TYPE_CHECKING:
    from pimpampum.models.card import Card
    from pimpampum.models.dice import DiceSource
    from pimpampum.models.equipment import Equipment


@dataclass(frozen=True)
class StatSnapshot:
    """One evaluation of an effective stat.

    Attributes:
        stat: Stat that was resolved.
        base: Character's base value.
        modifiers: Sum of applicable modifiers, dice rolled once.
        equipment: Equipment contribution, dice rolled once.
        card: Card contribution (speed modifier of the played card).
    """

    stat: Stat
    base: int
    modifiers: int = 0
    equipment: int = 0
    card: int = 0

    @property
    def total(self) -> int:
        return self.base + self.modifiers + self.equipment + self.card


@dataclass
class Character:
    """A combatant with a fixed build and mutable combat state.

    Attributes:
        name: Display name, used for narration and per-run naming.
        max_wounds: Wounds that eliminate the character.
        strength: Base strength.
        magic: Base magic.
        defense: Base defense.
        speed: Base speed.
        cards: Fixed hand.
        character_class: Class label for reports.
        equipment: Items keyed by slot.
        handle: Roster handle assigned by the engine.
        current_wounds: Wounds taken this combat.
        modifiers: Active timed modifiers.
        defense_grants: Banked defense grants, consumed most-recent-first.
        skip_turns: Pending selections to sit out.
        stunned: Attack cards fizzle until end of round.
        dodging: Incoming attacks miss this round.
        focus_interrupted: A Focus card played this round fizzles.
        played_card_index: Card chosen this round, if any.
        wounded_this_combat: Has taken at least one wound this combat.
        absorbs_pain: Grants that block earn this character permanent defense.
        poisoned_weapon: Physical hits deal one extra wound.
    """

    name: str
    max_wounds: int
    strength: int
    magic: int
    defense: int
    speed: int
    cards: tuple[Card, ...] = ()
    character_class: str = ""
    equipment: dict[EquipmentSlot, Equipment] = field(default_factory=dict)
    handle: CombatantId | None = None

    current_wounds: int = 0
    modifiers: list[StatModifier] = field(default_factory=list)
    defense_grants: list[DefenseGrant] = field(default_factory=list)
    skip_turns: int = 0
    stunned: bool = False
    dodging: bool = False
    focus_interrupted: bool = False
    played_card_index: int | None = None
    wounded_this_combat: bool = False
    absorbs_pain: bool = False
    poisoned_weapon: bool = False

    def __post_init__(self) -> None:
        if self.max_wounds < 1:
            raise ValidationError(
                "Characters need at least one wound to lose",
                field_name="max_wounds",
                invalid_value=self.max_wounds,
            )
        self.cards = tuple(self.cards)

    # =========================================================================
    # Identity & Lifecycle
    # =========================================================================

    @property
    def team(self) -> int:
        """Team id assigned by the engine, 0 before adoption."""
        return self.handle.team if self.handle is not None else 0

    def is_alive(self) -> bool:
        return self.current_wounds < self.max_wounds

    def take_wound(self) -> bool:
        """Take exactly one wound.

        Returns:
            True if the character is no longer alive.
        """
        if self.current_wounds < self.max_wounds:
            self.current_wounds += 1
        self.wounded_this_combat = True
        return not self.is_alive()

    def equip(self, item: Equipment) -> None:
        """Equip an item, replacing whatever occupied its slot."""
        self.equipment[item.slot] = item

    def reset_for_new_combat(self) -> None:
        """Clear every piece of combat-scoped state."""
        self.current_wounds = 0
        self.modifiers.clear()
        self.defense_grants.clear()
        self.skip_turns = 0
        self.stunned = False
        self.wounded_this_combat = False
        self.absorbs_pain = False
        self.poisoned_weapon = False
        self.reset_for_new_round()

    def reset_for_new_round(self) -> None:
        """Clear the flags that only last one round."""
        self.dodging = False
        self.focus_interrupted = False
        self.played_card_index = None
        self.defense_grants.clear()

    def consume_skip_turn(self) -> bool:
        """Use up one pending skipped selection.

        Returns:
            True if the character sits this round out.
        """
        if self.skip_turns > 0:
            self.skip_turns -= 1
            return True
        return False

    # =========================================================================
    # Cards
    # =========================================================================

    @property
    def played_card(self) -> Card | None:
        if self.played_card_index is None:
            return None
        return self.cards[self.played_card_index]

    def committed_to_focus(self) -> bool:
        """Whether the card chosen this round is a Focus card."""
        card = self.played_card
        return card is not None and card.is_focus

    def interrupt_focus(self) -> bool:
        """Interrupt this round's Focus card, if one was chosen.

        Returns:
            True if a Focus card was interrupted.
        """
        if self.committed_to_focus():
            self.focus_interrupted = True
            return True
        return False

    # =========================================================================
    # Modifiers & Stats
    # =========================================================================

    def add_modifier(self, modifier: StatModifier) -> None:
        self.modifiers.append(modifier)

    def advance_turn_modifiers(self) -> None:
        """Decay every modifier across one round boundary."""
        advanced = (modifier.advanced() for modifier in self.modifiers)
        self.modifiers = [modifier for modifier in advanced if modifier is not None]

    def base_stat(self, stat: Stat) -> int:
        match stat:
            case Stat.SPEED:
                return self.speed
            case Stat.STRENGTH:
                return self.strength
            case Stat.MAGIC:
                return self.magic
            case Stat.DEFENSE:
                return self.defense
            case Stat.ATTACK_BONUS:
                return 0

    def resolve_stat(
        self,
        stat: Stat,
        source: DiceSource,
        *,
        against: CombatantId | None = None,
        card: Card | None = None,
    ) -> StatSnapshot:
        """Evaluate an effective stat once.

        Args:
            stat: Stat to resolve.
            source: Random source for modifier and equipment dice.
            against: Combatant the value is used against; conditional
                modifiers only count when they name it.
            card: Card whose speed modifier counts towards speed.

        Returns:
            The resolved snapshot.
        """
        modifier_total = sum(
            modifier.resolve(source)
            for modifier in self.modifiers
            if modifier.stat is stat and modifier.applies_against(against)
        )
        equipment_total = sum(
            item.contribution(stat, source) for item in self.equipment.values()
        )
        card_total = card.speed_modifier if card is not None and stat is Stat.SPEED else 0
        return StatSnapshot(
            stat=stat,
            base=self.base_stat(stat),
            modifiers=modifier_total,
            equipment=equipment_total,
            card=card_total,
        )

    def offensive_stat(self, card: Card) -> Stat:
        """Stat an attack with ``card`` draws on."""
        return Stat.STRENGTH if card.is_physical else Stat.MAGIC

    # =========================================================================
    # Defense Grants
    # =========================================================================

    def receive_defense_grant(self, grant: DefenseGrant) -> None:
        self.defense_grants.append(grant)

    def pop_defense_grant(self) -> DefenseGrant | None:
        """Consume the most recent defense grant, if any."""
        if self.defense_grants:
            return self.defense_grants.pop()
        return None

    def __str__(self) -> str:
        return f"{self.name} ({self.current_wounds}/{self.max_wounds})"


__all__ = [
    "Character",
    "StatSnapshot",
]
