"""Deterministic pseudo-random numbers driven by a floating-point seed."""

from __future__ import annotations

from typing import MutableSequence, TypeVar

T = TypeVar("T")

_MODULUS = 2147483647
_MULTIPLIER = 1389796

DEFAULT_SEED = 91648253.0


class SeededRandom:
    """A small multiplicative congruential generator.

    The whole state is the ``seed`` attribute, so a sequence can be
    reproduced by starting again from the same seed.
    """

    def __init__(self, seed: float = DEFAULT_SEED) -> None:
        self.seed = float(seed)

    def drand(self) -> float:
        """Advance the seed and return a number in ``[0, 1)``."""
        seed = self.seed * _MULTIPLIER
        q = int(seed / _MODULUS)
        seed -= float(q) * _MODULUS
        self.seed = seed
        return seed / _MODULUS

    def irand(self, size: int) -> int:
        """Return an integer in ``[0, size)`` (``0`` when ``size`` is ``0``)."""
        return int(self.drand() * size)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle ``items`` in place."""
        n = len(items)
        for i in range(n):
            pick = i + self.irand(n - i)
            items[i], items[pick] = items[pick], items[i]