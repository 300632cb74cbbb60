"""Round-based combat resolution between two teams.

The CombatEngine owns both rosters for the lifetime of one combat. Each
round runs four phases:

1. SELECTING_CARDS: every living character consumes a pending skip or asks
   the selection policy for a card.
2. ORDERING_BY_SPEED: chosen actions are stable-sorted by effective speed
   including the card's speed modifier.
3. RESOLVING_ACTIONS: actions resolve strictly in order; dead actors are
   skipped and the round aborts as soon as one side is eliminated.
4. END_OF_ROUND_CLEANUP: modifiers decay and stuns wear off.

The combat ends when a side has no living members, when nobody can act
in a round, or when the round cap is reached. Unless a side was wiped out
the side with more living members wins.

Example:
    >>> engine = CombatEngine([create_fighter("A")], [create_goblin("B")])
    >>> outcome = engine.run_combat()
    >>> outcome.winner in (Winner.TEAM1, Winner.TEAM2, Winner.DRAW)
    True
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import TypeVar, assert_never

from pimpampum.core.config import CombatSettings, get_settings
from pimpampum.core.exceptions import CombatError, InvalidRosterError
from pimpampum.core.logging import bind_context, get_logger, unbind_context
from pimpampum.engine.character import Character
from pimpampum.engine.dice import DiceRoller
from pimpampum.engine.modifiers import CombatantId, DefenseGrant, StatModifier
from pimpampum.engine.policy import PASS_ACTION, CardSelectionPolicy
from pimpampum.engine.stats import CombatStats
from pimpampum.engine.turn_order import ActionEntry, order_by_speed
from pimpampum.models.card import Card
from pimpampum.models.dice import DiceRoll, DiceSource
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
    EnemyStrengthDebuff,
    MagicBoost,
    MultiTarget,
    NoEffect,
    PoisonWeapon,
    Sacrifice,
    SkipNextTurn,
    SkipNextTurns,
    StrengthBoost,
    Stun,
    TeamSpeedDefenseBoost,
    Vengeance,
)
from pimpampum.models.enums import ModifierDuration, Stat


logger = get_logger(__name__)

T = TypeVar("T")

ABSORB_PAIN_SOURCE = "Absorvir dolor"


# =============================================================================
# Phases & Outcomes
# =============================================================================


class RoundPhase(StrEnum):
    """Where the engine is within the round state machine."""

    SELECTING_CARDS = "selecting_cards"
    ORDERING_BY_SPEED = "ordering_by_speed"
    RESOLVING_ACTIONS = "resolving_actions"
    END_OF_ROUND_CLEANUP = "end_of_round_cleanup"
    FINISHED = "finished"


class Winner(IntEnum):
    """Outcome code of one combat."""

    DRAW = 0
    TEAM1 = 1
    TEAM2 = 2


@dataclass(frozen=True)
class CombatOutcome:
    """Result of running one combat to completion.

    Attributes:
        winner: Outcome code.
        rounds: Rounds played.
        stats: Card usage for this combat only.
        survivors: Living members of team 1 and team 2 at the end.
    """

    winner: Winner
    rounds: int
    stats: CombatStats
    survivors: tuple[int, int]


def _last_max(items: Sequence[T], key: Callable[[T], int]) -> T | None:
    """Item with the greatest key, preferring the later one on ties."""
    best: T | None = None
    for item in items:
        if best is None or key(item) >= key(best):
            best = item
    return best


# =============================================================================
# Combat Engine
# =============================================================================


class CombatEngine:
    """Resolves one combat between two rosters.

    Team ids are assigned by position: the first roster is team 1. Every
    character is fully reset on adoption, so factories may hand over fresh
    or reused characters alike.

    Attributes:
        teams: Rosters keyed by team id.
        round_number: Rounds started so far.
        phase: Current round phase.
        stats: Card usage recorded so far.
        sacrifice_links: Protected handle to protector handle.
        vengeance_links: Protected handle to avenger handle.
        ambush_target: Target of this round's coordinated ambush.
        wounded_this_round: Handles wounded during the current round.
    """

    def __init__(
        self,
        team1: Sequence[Character],
        team2: Sequence[Character],
        *,
        verbose: bool = False,
        dice: DiceSource | None = None,
        policy: CardSelectionPolicy | None = None,
        max_rounds: int | None = None,
        settings: CombatSettings | None = None,
    ) -> None:
        """Adopt both rosters and reset every character.

        Args:
            team1: First roster.
            team2: Second roster.
            verbose: Narrate the combat through the structured logger.
            dice: Random source; a fresh unseeded DiceRoller by default.
            policy: Card selection policy.
            max_rounds: Round cap; the configured cap by default.
            settings: Combat rule settings; the configured ones by default.

        Raises:
            InvalidRosterError: If either roster is empty.
        """
        for team, roster in ((1, team1), (2, team2)):
            if not roster:
                raise InvalidRosterError("Cannot start a combat with an empty roster", team=team)

        settings = settings or get_settings().combat
        self.verbose = verbose
        self.dice: DiceSource = dice if dice is not None else DiceRoller()
        self.policy = policy or CardSelectionPolicy()
        self.max_rounds = max_rounds if max_rounds is not None else settings.max_rounds
        self._vengeance_dice = DiceRoll.parse(settings.vengeance_dice)
        self._ambush_dice = DiceRoll.parse(settings.ambush_dice)
        self._enchant_dice = DiceRoll.parse(settings.enchant_dice)

        self.teams: dict[int, list[Character]] = {1: list(team1), 2: list(team2)}
        for team, roster in self.teams.items():
            for index, character in enumerate(roster):
                character.handle = CombatantId(team, index)
                character.reset_for_new_combat()

        self.round_number = 0
        self.phase = RoundPhase.SELECTING_CARDS
        self.stats = CombatStats()
        self.sacrifice_links: dict[CombatantId, CombatantId] = {}
        self.vengeance_links: dict[CombatantId, CombatantId] = {}
        self.ambush_target: CombatantId | None = None
        self.wounded_this_round: set[CombatantId] = set()
        self._plays: dict[int, list[tuple[str, str]]] = {1: [], 2: []}

    # =========================================================================
    # Roster Queries
    # =========================================================================

    def character(self, handle: CombatantId) -> Character:
        return self.teams[handle.team][handle.index]

    @staticmethod
    def opponent(team: int) -> int:
        return 2 if team == 1 else 1

    def living(self, team: int, *, exclude: Character | None = None) -> list[Character]:
        """Living members of a team in roster order."""
        return [
            member
            for member in self.teams[team]
            if member.is_alive() and member is not exclude
        ]

    def living_count(self, team: int) -> int:
        return sum(1 for member in self.teams[team] if member.is_alive())

    def is_combat_over(self) -> bool:
        return self.living_count(1) == 0 or self.living_count(2) == 0

    def _narrate(self, event: str, **kwargs: object) -> None:
        if self.verbose:
            logger.info(event, **kwargs)

    # =========================================================================
    # Combat & Rounds
    # =========================================================================

    def run_combat(self) -> CombatOutcome:
        """Run rounds until a side is eliminated or the cap is reached.

        Returns:
            The combat outcome with this combat's statistics.

        Raises:
            CombatError: If the combat was already run.
        """
        if self.phase is RoundPhase.FINISHED:
            raise CombatError("Combat already finished", round_number=self.round_number)

        for team, roster in self.teams.items():
            for member in roster:
                self._narrate(
                    "Combatant ready",
                    team=team,
                    name=member.name,
                    character_class=member.character_class,
                    wounds=member.max_wounds,
                    strength=member.strength,
                    magic=member.magic,
                    defense=member.defense,
                    speed=member.speed,
                )

        while self.round_number < self.max_rounds and not self.is_combat_over():
            if not self.run_round():
                break

        survivors = (self.living_count(1), self.living_count(2))
        winner = self._score(*survivors)
        if winner is not Winner.DRAW:
            for card_name, card_type in self._plays[int(winner)]:
                self.stats.record_winner_play(card_name, card_type)

        self.phase = RoundPhase.FINISHED
        if self.verbose:
            unbind_context("round")
        self._narrate("Combat ended", winner=winner.name, rounds=self.round_number, survivors=survivors)
        return CombatOutcome(
            winner=winner,
            rounds=self.round_number,
            stats=self.stats,
            survivors=survivors,
        )

    @staticmethod
    def _score(team1_alive: int, team2_alive: int) -> Winner:
        if team1_alive > team2_alive:
            return Winner.TEAM1
        if team2_alive > team1_alive:
            return Winner.TEAM2
        return Winner.DRAW

    def run_round(self) -> bool:
        """Play one full round.

        Returns:
            False if the combat ended during the round or nobody could act,
            True otherwise.
        """
        self.round_number += 1
        self.ambush_target = None
        self.wounded_this_round.clear()
        if self.verbose:
            bind_context(round=self.round_number)

        self.phase = RoundPhase.SELECTING_CARDS
        for roster in self.teams.values():
            for member in roster:
                member.reset_for_new_round()
        chosen = self._select_cards()

        self.phase = RoundPhase.ORDERING_BY_SPEED
        if not chosen:
            self._narrate("Nobody acts, combat ends")
            return False
        ordered = order_by_speed(
            ActionEntry(
                actor=member.handle,
                name=member.name,
                card_index=card_index,
                speed=member.resolve_stat(Stat.SPEED, self.dice, card=member.cards[card_index]),
            )
            for member, card_index in chosen
            if member.handle is not None
        )
        for entry in ordered:
            self._narrate(
                "Resolution order",
                actor=entry.name,
                speed=entry.speed.total,
                base=entry.speed.base,
                card_modifier=entry.speed.card,
            )

        self.phase = RoundPhase.RESOLVING_ACTIONS
        for entry in ordered:
            actor = self.character(entry.actor)
            if not actor.is_alive():
                continue
            self.resolve_card(actor, actor.cards[entry.card_index])
            if self.is_combat_over():
                return False

        self.phase = RoundPhase.END_OF_ROUND_CLEANUP
        for roster in self.teams.values():
            for member in roster:
                member.advance_turn_modifiers()
                member.stunned = False
        return True

    def _select_cards(self) -> list[tuple[Character, int]]:
        chosen: list[tuple[Character, int]] = []
        for team, roster in self.teams.items():
            enemies = self.teams[self.opponent(team)]
            for member in roster:
                if not member.is_alive():
                    continue
                if member.consume_skip_turn():
                    self._narrate("Skips turn", actor=member.name)
                    continue
                card_index = self.policy.select_card(member, roster, enemies, self.dice)
                if card_index == PASS_ACTION:
                    self._narrate("Passes", actor=member.name)
                    continue
                member.played_card_index = card_index
                chosen.append((member, card_index))
                self._narrate("Card selected", actor=member.name, card=member.cards[card_index].name)
        return chosen

    # =========================================================================
    # Card Resolution
    # =========================================================================

    def resolve_card(self, actor: Character, card: Card) -> None:
        """Resolve one chosen card for its owner.

        The play is always recorded. A Focus card fizzles if its owner was
        interrupted; an attack fizzles if its owner is stunned.
        """
        card_type = card.card_type.value
        self.stats.record_play(card.name, card_type)
        self._plays[actor.team].append((card.name, card_type))
        self._narrate("Card played", actor=actor.name, card=card.name, card_type=card_type)

        if card.is_focus and actor.focus_interrupted:
            self.stats.record_interrupted(card.name, card_type)
            self._narrate("Focus interrupted", actor=actor.name, card=card.name)
            return
        if card.is_attack and actor.stunned:
            self._narrate("Stunned, attack fizzles", actor=actor.name, card=card.name)
            return

        if card.is_attack:
            self._resolve_attack_card(actor, card)
        if card.is_defense:
            self._resolve_defense_card(actor, card)
        if card.is_focus:
            self._resolve_focus_card(actor, card)

    def _resolve_attack_card(self, actor: Character, card: Card) -> None:
        count = card.effect.count if isinstance(card.effect, MultiTarget) else 1
        targets = self.living(self.opponent(actor.team))[:count]
        for target in targets:
            self.resolve_attack(actor, target, card)

        effect = card.effect
        match effect:
            case Stun():
                target = self._secondary_target(actor)
                if target is not None:
                    target.stunned = True
                    self._narrate("Stunned", target=target.name)
            case EnemySpeedDebuff(amount=amount):
                self._debuff_target(actor, Stat.SPEED, amount, card.name)
            case EnemyStrengthDebuff(amount=amount):
                self._debuff_target(actor, Stat.STRENGTH, amount, card.name)
            case Embestida():
                self._debuff_target(actor, Stat.SPEED, 2, card.name)
                actor.add_modifier(
                    StatModifier(Stat.SPEED, -3, ModifierDuration.NEXT_TURN, source=card.name)
                )
            case SkipNextTurn():
                actor.skip_turns = 1
            case SkipNextTurns(count=turns):
                actor.skip_turns = turns
            case (
                NoEffect()
                | MultiTarget()
                | AllyStrengthThisTurn()
                | StrengthBoost()
                | MagicBoost()
                | DefenseBoostDuration()
                | TeamSpeedDefenseBoost()
                | BlindingSmoke()
                | DodgeWithSpeedBoost()
                | CoordinatedAmbush()
                | Sacrifice()
                | Vengeance()
                | EnchantWeapon()
                | BloodThirst()
                | AbsorbPain()
                | DefendMultiple()
                | PoisonWeapon()
            ):
                pass
            case _:
                assert_never(effect)

    def _secondary_target(self, actor: Character) -> Character | None:
        enemies = self.teams[self.opponent(actor.team)]
        index = self.policy.select_target(enemies, self.dice)
        if index is None:
            return None
        return enemies[index]

    def _debuff_target(self, actor: Character, stat: Stat, amount: int, source: str) -> None:
        target = self._secondary_target(actor)
        if target is None:
            return
        target.add_modifier(
            StatModifier(stat, -amount, ModifierDuration.NEXT_TURN, source=source)
        )
        self._narrate("Debuffed", target=target.name, stat=stat.value, amount=-amount)

    def _boost_ally_strength(self, actor: Character, amount: int, source: str) -> None:
        for ally in self.living(actor.team, exclude=actor):
            ally.add_modifier(
                StatModifier(Stat.STRENGTH, amount, ModifierDuration.THIS_TURN, source=source)
            )
            self._narrate("Strength boosted", target=ally.name, amount=amount)

    def _resolve_defense_card(self, actor: Character, card: Card) -> None:
        effect = card.effect
        match effect:
            case Sacrifice():
                allies = self.living(actor.team, exclude=actor)
                if allies and actor.handle is not None and allies[0].handle is not None:
                    self.sacrifice_links[allies[0].handle] = actor.handle
                    self._narrate("Sacrifice", protector=actor.name, protected=allies[0].name)
            case DefendMultiple(count=count):
                self._grant_defense(actor, card, count)
            case AbsorbPain():
                if self._grant_defense(actor, card, 1):
                    actor.absorbs_pain = True
            case (
                NoEffect()
                | Stun()
                | SkipNextTurn()
                | SkipNextTurns()
                | StrengthBoost()
                | MagicBoost()
                | AllyStrengthThisTurn()
                | DefenseBoostDuration()
                | TeamSpeedDefenseBoost()
                | EnemySpeedDebuff()
                | EnemyStrengthDebuff()
                | Embestida()
                | BlindingSmoke()
                | DodgeWithSpeedBoost()
                | CoordinatedAmbush()
                | Vengeance()
                | EnchantWeapon()
                | BloodThirst()
                | MultiTarget()
                | PoisonWeapon()
            ):
                self._grant_defense(actor, card, 1)
            case _:
                assert_never(effect)

    def _grant_defense(self, actor: Character, card: Card, count: int) -> bool:
        """Bank the actor's current defense plus the card dice on allies.

        Returns:
            True if the card carried defense dice.
        """
        if card.defense is None or actor.handle is None:
            return False
        captured = actor.resolve_stat(Stat.DEFENSE, self.dice).total
        for ally in self.living(actor.team)[:count]:
            ally.receive_defense_grant(
                DefenseGrant(
                    benefactor=actor.handle,
                    base_defense=captured,
                    dice=card.defense,
                    source=card.name,
                )
            )
            self._narrate(
                "Defense granted",
                grantor=actor.name,
                target=ally.name,
                base_defense=captured,
                dice=str(card.defense),
            )
        return True

    def _resolve_focus_card(self, actor: Character, card: Card) -> None:
        effect = card.effect
        match effect:
            case StrengthBoost(amount=amount):
                actor.add_modifier(
                    StatModifier(Stat.STRENGTH, amount, ModifierDuration.REST_OF_COMBAT, source=card.name)
                )
            case MagicBoost(amount=amount):
                actor.add_modifier(
                    StatModifier(Stat.MAGIC, amount, ModifierDuration.REST_OF_COMBAT, source=card.name)
                )
            case AllyStrengthThisTurn(amount=amount):
                self._boost_ally_strength(actor, amount, card.name)
            case DefenseBoostDuration(dice=dice, turns=turns):
                duration = (
                    ModifierDuration.THIS_AND_NEXT_TURN if turns >= 2 else ModifierDuration.THIS_TURN
                )
                recipients = [actor, *self.living(actor.team, exclude=actor)[:1]]
                for recipient in recipients:
                    recipient.add_modifier(
                        StatModifier(Stat.DEFENSE, 0, duration, dice=dice, source=card.name)
                    )
            case TeamSpeedDefenseBoost():
                for ally in self.living(actor.team):
                    ally.add_modifier(
                        StatModifier(Stat.SPEED, 2, ModifierDuration.REST_OF_COMBAT, source=card.name)
                    )
                    ally.add_modifier(
                        StatModifier(Stat.DEFENSE, 1, ModifierDuration.REST_OF_COMBAT, source=card.name)
                    )
            case BlindingSmoke():
                for enemy in self.living(self.opponent(actor.team)):
                    enemy.add_modifier(
                        StatModifier(Stat.SPEED, -4, ModifierDuration.THIS_TURN, source=card.name)
                    )
                for ally in self.living(actor.team):
                    ally.add_modifier(
                        StatModifier(Stat.SPEED, 2, ModifierDuration.THIS_TURN, source=card.name)
                    )
            case DodgeWithSpeedBoost():
                actor.dodging = True
                actor.add_modifier(
                    StatModifier(Stat.SPEED, 3, ModifierDuration.NEXT_TURN, source=card.name)
                )
            case CoordinatedAmbush():
                self._coordinate_ambush(actor, card)
            case Vengeance():
                self._bind_vengeance(actor)
            case EnchantWeapon():
                target = _last_max(
                    self.living(actor.team), key=lambda ally: max(ally.strength, ally.magic)
                ) or actor
                target.add_modifier(
                    StatModifier(
                        Stat.ATTACK_BONUS,
                        0,
                        ModifierDuration.REST_OF_COMBAT,
                        dice=self._enchant_dice,
                        source=card.name,
                    )
                )
                self._narrate("Weapon enchanted", target=target.name)
            case PoisonWeapon():
                target = _last_max(
                    self.living(actor.team, exclude=actor), key=lambda ally: ally.strength
                ) or actor
                target.poisoned_weapon = True
                self._narrate("Weapon poisoned", target=target.name)
            case BloodThirst():
                for enemy in self.living(self.opponent(actor.team)):
                    if enemy.wounded_this_combat:
                        self._wound(enemy, cause=card.name)
            case (
                NoEffect()
                | Stun()
                | SkipNextTurn()
                | SkipNextTurns()
                | EnemySpeedDebuff()
                | EnemyStrengthDebuff()
                | Embestida()
                | Sacrifice()
                | AbsorbPain()
                | MultiTarget()
                | DefendMultiple()
            ):
                pass
            case _:
                assert_never(effect)

    def _coordinate_ambush(self, actor: Character, card: Card) -> None:
        enemies = self.living(self.opponent(actor.team))
        if not enemies or enemies[0].handle is None:
            return
        target = enemies[0]
        self.ambush_target = target.handle
        for ally in self.living(actor.team, exclude=actor):
            ally.add_modifier(
                StatModifier(
                    Stat.ATTACK_BONUS,
                    0,
                    ModifierDuration.THIS_TURN,
                    dice=self._ambush_dice,
                    source=card.name,
                    condition=target.handle,
                )
            )
        self._narrate("Ambush prepared", target=target.name)

    def _bind_vengeance(self, actor: Character) -> None:
        others = self.living(actor.team, exclude=actor)
        wounded = [ally for ally in others if ally.current_wounds > 0]
        if wounded:
            protected = _last_max(wounded, key=lambda ally: ally.current_wounds) or actor
        elif others:
            protected = others[0]
        else:
            protected = actor
        if protected.handle is not None and actor.handle is not None:
            self.vengeance_links[protected.handle] = actor.handle
            self._narrate("Vengeance sworn", avenger=actor.name, protected=protected.name)

    # =========================================================================
    # Attack Contest
    # =========================================================================

    def resolve_attack(self, attacker: Character, target: Character, card: Card) -> bool:
        """Resolve one attack against one nominal target.

        Args:
            attacker: Character making the attack.
            target: Nominal target before any sacrifice redirect.
            card: Attack card being played.

        Returns:
            True if the attack landed.
        """
        if not target.is_alive():
            return False

        recipient = target
        protector_id = self.sacrifice_links.get(target.handle) if target.handle else None
        if protector_id is not None:
            protector = self.character(protector_id)
            if protector.is_alive():
                recipient = protector
                self._narrate("Attack intercepted", protector=protector.name, protected=target.name)

        if recipient.dodging:
            self._narrate("Attack dodged", target=recipient.name)
            return False

        offense = attacker.resolve_stat(attacker.offensive_stat(card), self.dice)
        dice = card.attack_dice
        rolled = dice.roll(self.dice) if dice is not None else 0
        bonus = attacker.resolve_stat(Stat.ATTACK_BONUS, self.dice, against=recipient.handle)
        attack_total = offense.total + rolled + bonus.total

        grant = recipient.pop_defense_grant()
        if grant is not None:
            defense_total = grant.roll(self.dice)
            wound_recipient = self.character(grant.benefactor)
        else:
            defense_total = recipient.resolve_stat(Stat.DEFENSE, self.dice).total
            wound_recipient = recipient

        self._narrate(
            "Attack rolled",
            attacker=attacker.name,
            target=recipient.name,
            stat=offense.total,
            dice=rolled,
            bonus=bonus.total,
            attack=attack_total,
            defense=defense_total,
            defender=wound_recipient.name,
        )

        self._vengeance_counter(attacker, target)

        if attack_total > defense_total:
            wound_recipient.interrupt_focus()
            self._wound(wound_recipient, cause=card.name)
            if card.is_physical and attacker.poisoned_weapon and wound_recipient.is_alive():
                self._wound(wound_recipient, cause="poison")
            return True

        self._narrate("Attack blocked", target=recipient.name)
        if grant is None:
            recipient.interrupt_focus()
        else:
            grantor = self.character(grant.benefactor)
            if grantor.absorbs_pain:
                grantor.add_modifier(
                    StatModifier(
                        Stat.DEFENSE,
                        1,
                        ModifierDuration.REST_OF_COMBAT,
                        source=ABSORB_PAIN_SOURCE,
                    )
                )
                self._narrate("Pain absorbed", grantor=grantor.name)
        return False

    def _vengeance_counter(self, attacker: Character, nominal_target: Character) -> None:
        if nominal_target.handle is None:
            return
        avenger_id = self.vengeance_links.get(nominal_target.handle)
        if avenger_id is None:
            return
        avenger = self.character(avenger_id)
        if not avenger.is_alive():
            return
        counter = (
            avenger.resolve_stat(Stat.STRENGTH, self.dice).total
            + self._vengeance_dice.roll(self.dice)
        )
        attacker_defense = attacker.resolve_stat(Stat.DEFENSE, self.dice).total
        self._narrate(
            "Vengeance counter",
            avenger=avenger.name,
            attack=counter,
            defense=attacker_defense,
        )
        if counter > attacker_defense:
            self._wound(attacker, cause="vengeance")

    def _wound(self, character: Character, *, cause: str) -> bool:
        died = character.take_wound()
        if character.handle is not None:
            self.wounded_this_round.add(character.handle)
        self._narrate(
            "Wounded",
            target=character.name,
            cause=cause,
            wounds=character.current_wounds,
            max_wounds=character.max_wounds,
            defeated=died,
        )
        return died


__all__ = [
    "RoundPhase",
    "Winner",
    "CombatOutcome",
    "CombatEngine",
]
