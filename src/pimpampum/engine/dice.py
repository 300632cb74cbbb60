"""Random source for combat resolution.

Each engine owns one DiceRoller. The roller wraps a private
``random.Random`` stream so concurrent simulations never share state and a
seed reproduces a combat exactly.
"""

from __future__ import annotations

import random

from pimpampum.core.exceptions import DiceRollError
from pimpampum.core.logging import get_logger


logger = get_logger(__name__)


class DiceRoller:
    """Seedable uniform random source.

    Satisfies the DiceSource protocol consumed by dice expressions,
    equipment and the card-selection policy.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> 2 <= roller.roll_dice(2, 6) <= 12
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional seed for a reproducible stream.
        """
        self._seed = seed
        self._rng = random.Random(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def roll_dice(self, count: int, sides: int) -> int:
        """Sum ``count`` dice of ``sides`` faces.

        Args:
            count: Number of dice.
            sides: Faces per die.

        Returns:
            The dice total; 0 when ``count`` is 0.

        Raises:
            DiceRollError: If the dice are malformed.
        """
        if count < 0 or (count > 0 and sides < 1):
            raise DiceRollError(
                "Cannot roll malformed dice",
                expression=f"{count}d{sides}",
            )
        return sum(self._rng.randint(1, sides) for _ in range(count))

    def random(self) -> float:
        """Uniform float in ``[0, 1)``."""
        return self._rng.random()


def derive_seed(base_seed: int | None, offset: int) -> int | None:
    """Derive an independent seed for a batch or worker.

    Args:
        base_seed: Base seed, or None for an unseeded stream.
        offset: Batch or combat index.

    Returns:
        A deterministic seed, or None when the base is None.
    """
    if base_seed is None:
        return None
    return random.Random(base_seed * 1_000_003 + offset).getrandbits(63)


__all__ = [
    "DiceRoller",
    "derive_seed",
]
