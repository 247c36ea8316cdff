"""Seeded random source shared by every generator.

All draws made while generating one team go through a single PRNG so a
team can be reproduced from its seed.
"""

import math
import os
import random
from collections.abc import Sequence
from typing import Any, TypeVar

T = TypeVar("T")

Seed = int | tuple[int, ...]


def _seed_to_int(seed: Seed) -> int:
    """Fold a tuple seed into one integer for random.Random."""
    if isinstance(seed, int):
        return seed
    value = 0
    for part in seed:
        value = (value << 16) | (part & 0xFFFF)
    return value


def fast_pop(items: list[T], index: int) -> T:
    """Remove and return items[index] by swapping in the last element.

    Does not preserve order.
    """
    length = len(items)
    if index < 0 or index >= length:
        raise IndexError(f"Index {index} out of range for list of length {length}")
    value = items[index]
    items[index] = items[length - 1]
    items.pop()
    return value


class PRNG:
    """Deterministic random source.

    Wraps random.Random with the draw primitives the generators use.
    """

    def __init__(self, seed: Seed | None = None):
        """Initialize the PRNG.

        Args:
            seed: Integer or tuple of integers. If None, a fresh seed is
                taken from the operating system.
        """
        if seed is None:
            seed = self.generate_seed()
        self._seed: Seed = seed
        self._random = random.Random(_seed_to_int(seed))

    @staticmethod
    def generate_seed() -> tuple[int, int, int, int]:
        """Create a new four-part seed."""
        raw = os.urandom(8)
        return tuple(int.from_bytes(raw[i:i + 2], "big") for i in range(0, 8, 2))  # type: ignore[return-value]

    @property
    def seed(self) -> Seed:
        return self._seed

    def reseed(self, seed: Seed) -> None:
        """Restart the stream from a new seed."""
        self._seed = seed
        self._random.seed(_seed_to_int(seed))

    def next(self, m: float | None = None, n: float | None = None) -> Any:
        """Draw a number.

        Args:
            m: With no arguments, returns a float in [0, 1). With only m,
                returns an integer in [0, m).
            n: With both, returns an integer in [m, n).

        Returns:
            The drawn number
        """
        result = self._random.random()
        if m is None:
            return result
        if n is None:
            return math.floor(result * m)
        return math.floor(result * (n - m)) + math.floor(m)

    def random_chance(self, numerator: int, denominator: int) -> bool:
        """True with probability numerator / denominator."""
        return self.next(denominator) < numerator

    def sample(self, items: Sequence[T]) -> T:
        """Pick one element uniformly."""
        if not items:
            raise ValueError("Cannot sample from empty list")
        return items[self.next(len(items))]

    def sample_no_replace(self, items: list[T]) -> T | None:
        """Remove and return a random element, or None when empty."""
        if not items:
            return None
        return fast_pop(items, self.next(len(items)))
