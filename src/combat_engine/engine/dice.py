"""Random number sources for combat.

Every random draw in the engine goes through a ``RandomSource`` so tests
can substitute a deterministic one. ``DiceRoller`` is the production
implementation, backed by its own ``random.Random`` instance so seeding it
never touches global random state.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from functools import lru_cache
from typing import Protocol, TypeVar, runtime_checkable

from combat_engine.core.exceptions import ValidationError
from combat_engine.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """Pluggable source of uniform random draws."""

    def randint(self, low: int, high: int) -> int:
        """Return a uniform integer in [low, high]."""
        ...

    def choice(self, options: Sequence[T]) -> T:
        """Return a uniformly chosen element of a non-empty sequence."""
        ...


class DiceRoller:
    """Seedable random source.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> 3 <= roller.randint(3, 8) <= 8
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        self._rng = random.Random(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        """Seed the roller was created with."""
        return self._seed

    def randint(self, low: int, high: int) -> int:
        """Roll a uniform integer in [low, high].

        Raises:
            ValidationError: If low is greater than high.
        """
        if low > high:
            raise ValidationError(
                f"Invalid range {low}-{high}",
                field_name="range",
                invalid_value=(low, high),
            )
        return self._rng.randint(low, high)

    def choice(self, options: Sequence[T]) -> T:
        """Pick a uniform element.

        Raises:
            ValidationError: If options is empty.
        """
        if not options:
            raise ValidationError("Cannot choose from an empty sequence", field_name="options")
        return self._rng.choice(options)


@lru_cache(maxsize=1)
def default_roller() -> DiceRoller:
    """Get the process-wide roller, seeded from settings on first use.

    Monsters created without an explicit random source all draw from
    this one stream.
    """
    from combat_engine.core.config import get_settings

    return DiceRoller(seed=get_settings().game.rng_seed)


def reset_default_roller() -> None:
    """Drop the shared roller so the next use re-reads the seed."""
    default_roller.cache_clear()


__all__ = [
    "RandomSource",
    "DiceRoller",
    "default_roller",
    "reset_default_roller",
]
