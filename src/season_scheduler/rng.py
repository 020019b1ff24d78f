"""
Seeded RNG for deterministic, reproducible schedules.

Every random decision made while building a season goes through one of
these, so the same seed and inputs always yield the same season.
"""

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class SeededRNG:
    """Wrapper around random.Random; never touches the global random state."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def random(self) -> float:
        return self._rng.random()

    def chance(self, probability: float) -> bool:
        """True with the given probability (0-1)."""
        return self._rng.random() < probability

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def pick(self, seq: Sequence[T]) -> T:
        return seq[int(self._rng.random() * len(seq))]

    def shuffle(self, seq: Sequence[T]) -> list[T]:
        """Return a shuffled copy; the input is left untouched."""
        result = list(seq)
        self._rng.shuffle(result)
        return result
