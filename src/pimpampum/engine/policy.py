"""Weighted heuristic card selection.

The policy scores every card in a hand and samples one with a single
weighted draw. It only reads the rosters; every effective stat it needs is
resolved once per decision and reused across all cards.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from pimpampum.models.effects import (
    BlindingSmoke,
    BloodThirst,
    CoordinatedAmbush,
    DodgeWithSpeedBoost,
    MagicBoost,
    PoisonWeapon,
    StrengthBoost,
    TeamSpeedDefenseBoost,
    Vengeance,
)
from pimpampum.models.enums import Stat


if TYPE_CHECKING:
    from pimpampum.engine.character import Character
    from pimpampum.models.card import Card
    from pimpampum.models.dice import DiceSource


PASS_ACTION = -1
"""Sentinel returned for an empty hand."""


class SelectionWeights(BaseModel):
    """Tunable weights of the selection heuristic.

    Attributes:
        base: Starting weight of every card.
        lethal_finish: Attack bonus per living enemy one wound from death.
        stat_advantage: Attack bonus when the expected attack beats the mean
            enemy defense.
        self_wounded: Defense bonus when the owner is wounded.
        ally_wounded: Defense bonus per wounded living ally.
        protect_focus: Defense bonus per living ally committed to Focus.
        stat_boost: Focus bonus for strength or magic boosts.
        poison: Focus bonus for weapon poisoning.
        dodge_near_death: Dodge bonus when one wound from death.
        dodge: Dodge bonus otherwise.
        team_boost: Team speed and defense boost bonus.
        blinding_smoke: Blinding smoke bonus.
        ambush: Coordinated ambush bonus.
        vengeance: Vengeance bonus.
        blood_thirst_per_enemy: Blood thirst bonus per enemy wounded this combat.
        focus_default: Bonus for any other Focus effect.
        speed_factor: Multiplier applied to the card's speed modifier.
        minimum: Floor for the final weight.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    base: float = 10.0
    lethal_finish: float = 15.0
    stat_advantage: float = 10.0
    self_wounded: float = 10.0
    ally_wounded: float = 5.0
    protect_focus: float = 20.0
    stat_boost: float = 8.0
    poison: float = 10.0
    dodge_near_death: float = 15.0
    dodge: float = 3.0
    team_boost: float = 7.0
    blinding_smoke: float = 6.0
    ambush: float = 5.0
    vengeance: float = 4.0
    blood_thirst_per_enemy: float = 5.0
    focus_default: float = 3.0
    speed_factor: float = 1.5
    minimum: float = Field(default=1.0, gt=0)


class CardSelectionPolicy:
    """Stateless weighted card chooser.

    Example:
        >>> policy = CardSelectionPolicy()
        >>> index = policy.select_card(actor, allies, enemies, roller)
    """

    def __init__(self, weights: SelectionWeights | None = None) -> None:
        self.weights = weights or SelectionWeights()

    def card_weights(
        self,
        actor: Character,
        allies: Sequence[Character],
        enemies: Sequence[Character],
        source: DiceSource,
    ) -> list[float]:
        """Score every card in the actor's hand.

        Args:
            actor: Character choosing a card.
            allies: Actor's roster, actor included.
            enemies: Opposing roster.
            source: Random source for resolving effective stats.

        Returns:
            One weight per card, each at least ``weights.minimum``.
        """
        w = self.weights
        living_enemies = [enemy for enemy in enemies if enemy.is_alive()]
        living_allies = [ally for ally in allies if ally.is_alive()]

        mean_enemy_defense: float | None = None
        if living_enemies:
            defenses = [
                enemy.resolve_stat(Stat.DEFENSE, source).total for enemy in living_enemies
            ]
            mean_enemy_defense = sum(defenses) / len(defenses)
        offense = {
            stat: actor.resolve_stat(stat, source).total
            for stat in (Stat.STRENGTH, Stat.MAGIC)
        }
        near_death = sum(
            1 for enemy in living_enemies if enemy.current_wounds >= enemy.max_wounds - 1
        )

        weights: list[float] = []
        for card in actor.cards:
            weight = w.base
            if card.is_attack:
                weight += w.lethal_finish * near_death
                if mean_enemy_defense is not None:
                    dice = card.attack_dice
                    expected = offense[actor.offensive_stat(card)] + (
                        dice.average() if dice is not None else 0.0
                    )
                    if expected > mean_enemy_defense:
                        weight += w.stat_advantage
            elif card.is_defense:
                if actor.current_wounds > 0:
                    weight += w.self_wounded
                for ally in living_allies:
                    if ally.current_wounds > 0:
                        weight += w.ally_wounded
                    if ally.committed_to_focus():
                        weight += w.protect_focus
            elif card.is_focus:
                weight += self._focus_weight(card, actor, enemies)

            weight += card.speed_modifier * w.speed_factor
            weights.append(max(weight, w.minimum))
        return weights

    def _focus_weight(
        self,
        card: Card,
        actor: Character,
        enemies: Sequence[Character],
    ) -> float:
        w = self.weights
        match card.effect:
            case StrengthBoost() | MagicBoost():
                return w.stat_boost
            case PoisonWeapon():
                return w.poison
            case DodgeWithSpeedBoost():
                if actor.current_wounds >= actor.max_wounds - 1:
                    return w.dodge_near_death
                return w.dodge
            case TeamSpeedDefenseBoost():
                return w.team_boost
            case BlindingSmoke():
                return w.blinding_smoke
            case CoordinatedAmbush():
                return w.ambush
            case Vengeance():
                return w.vengeance
            case BloodThirst():
                wounded = sum(1 for enemy in enemies if enemy.wounded_this_combat)
                return w.blood_thirst_per_enemy * wounded
            case _:
                return w.focus_default

    def select_card(
        self,
        actor: Character,
        allies: Sequence[Character],
        enemies: Sequence[Character],
        source: DiceSource,
    ) -> int:
        """Pick a card index with one weighted draw.

        Returns:
            Index into the actor's hand, or PASS_ACTION for an empty hand.
        """
        if not actor.cards:
            return PASS_ACTION
        weights = self.card_weights(actor, allies, enemies, source)
        return weighted_index(weights, source.random())

    def select_target(
        self,
        enemies: Sequence[Character],
        source: DiceSource,
    ) -> int | None:
        """Pick the enemy an attack's secondary effect lands on.

        The most-wounded living enemy wins (the later one on ties). With no
        wounded enemy, the one with the lowest resolved defense wins (the
        earlier one on ties).

        Returns:
            Roster index of the chosen enemy, or None if none is alive.
        """
        living = [index for index, enemy in enumerate(enemies) if enemy.is_alive()]
        if not living:
            return None

        wounded = [index for index in living if enemies[index].current_wounds > 0]
        if wounded:
            best = wounded[0]
            for index in wounded[1:]:
                if enemies[index].current_wounds >= enemies[best].current_wounds:
                    best = index
            return best

        defenses = {
            index: enemies[index].resolve_stat(Stat.DEFENSE, source).total for index in living
        }
        return min(living, key=defenses.__getitem__)


def weighted_index(weights: Sequence[float], draw: float) -> int:
    """Cumulative-weight sampling.

    Args:
        weights: Non-negative weights, at least one.
        draw: Uniform value in ``[0, 1)``.

    Returns:
        The first index whose cumulative weight reaches the scaled draw,
        or the last index if rounding leaves a residual.
    """
    remaining = draw * sum(weights)
    for index, weight in enumerate(weights):
        remaining -= weight
        if remaining <= 0:
            return index
    return len(weights) - 1


__all__ = [
    "PASS_ACTION",
    "SelectionWeights",
    "CardSelectionPolicy",
    "weighted_index",
]
