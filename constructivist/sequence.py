"""
Seeded sequence generator — the single source of randomness for a render.

A string seed is hashed to a non-negative integer cursor, and every draw
advances the cursor through a fixed linear congruential recurrence. Same seed,
same stream, on every run and every platform.
"""

from __future__ import annotations

import math
import random
import string
from typing import Optional, Sequence, TypeVar

from config import settings

T = TypeVar("T")

_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280

_SEED_ALPHABET = string.ascii_lowercase + string.digits


def random_seed(length: Optional[int] = None) -> str:
    """Fresh short base-36 seed from the process RNG (never seeded)."""
    if length is None:
        length = settings.SEED_LENGTH
    return "".join(random.choices(_SEED_ALPHABET, k=length))


def seed_hash(seed: str) -> int:
    """
    Polynomial rolling hash (x31) over the seed's UTF-16 code units.

    Wrapped to a signed 32-bit value after every step, then made
    non-negative.
    """
    units = seed.encode("utf-16-le")
    h = 0
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        h = (h * 31 + code) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


class SeededSequence:
    """
    Deterministic pseudo-random stream built from a string seed.

    Draws must happen in one fixed order; each value depends on every
    draw before it.
    """

    def __init__(self, seed: str):
        self.seed = seed
        self._state = seed_hash(seed)

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Return a float in [0, 1)."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def range(self, lo: float, hi: float) -> float:
        return lo + self.next() * (hi - lo)

    def range_int(self, lo: float, hi: float) -> int:
        """Integer in [lo, hi); callers keep hi - lo >= 1."""
        return math.floor(self.range(lo, hi))

    def boolean(self, probability: float = 0.5) -> bool:
        return self.next() < probability

    def pick(self, items: Sequence[T]) -> T:
        """Uniform choice. An empty sequence raises IndexError."""
        if not items:
            raise IndexError("pick() from an empty sequence")
        return items[self.range_int(0, len(items))]
