"""
Module: builder.selection.random_source

Purpose:
    Random sources and shuffles used by the selection engine. A seeded
    linear-congruential generator gives reproducible papers; without a seed
    the stdlib Mersenne Twister is used.

Key Functions:
    - make_random(): Seeded LCG or non-deterministic source
    - fisher_yates(): Uniform in-place-free shuffle
    - comparator_shuffle(): Historical random-comparator sort (biased)
    - shuffle(): Dispatch on ShuffleMode

Key Classes:
    - SeededRandom: LCG with s ← (s×9301 + 49297) mod 233280
    - ShuffleMode: UNIFORM / LEGACY

Used By:
    - builder.selection.selector: Pool shuffling
"""

from __future__ import annotations

import functools
import random
from enum import Enum
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


class RandomSource(Protocol):
    """Anything with a random() method returning a float in [0, 1)."""

    def random(self) -> float: ...


class SeededRandom:
    """
    Deterministic linear-congruential source.

    Each call advances ``s ← (s × 9301 + 49297) mod 233280`` and returns
    ``s / 233280``. The state is advanced before the first value is returned.

    Example:
        >>> rng = SeededRandom(12345)
        >>> round(rng.random(), 5)
        0.41316
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._state = seed

    def random(self) -> float:
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS


class ShuffleMode(Enum):
    """
    How the candidate pool is permuted.

    Attributes:
        UNIFORM: Fisher–Yates pass driven by the random source
        LEGACY: Sort with a random pairwise comparator. Produces a biased
                permutation; kept for callers that want the older ordering.
    """

    UNIFORM = "uniform"
    LEGACY = "legacy"


def make_random(seed: Optional[int]) -> RandomSource:
    """Return the LCG for a seed (0 included), else a fresh stdlib source."""
    if seed is not None:
        return SeededRandom(seed)
    return random.Random()


def fisher_yates(items: Sequence[T], rng: RandomSource) -> list[T]:
    """Return a uniformly shuffled copy of ``items``."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def comparator_shuffle(items: Sequence[T], rng: RandomSource) -> list[T]:
    """Return a copy of ``items`` sorted with a random comparator."""
    return sorted(items, key=functools.cmp_to_key(lambda _a, _b: rng.random() - 0.5))


def shuffle(items: Sequence[T], rng: RandomSource, mode: ShuffleMode = ShuffleMode.UNIFORM) -> list[T]:
    """Shuffle ``items`` with the requested strategy."""
    if mode is ShuffleMode.LEGACY:
        return comparator_shuffle(items, rng)
    return fisher_yates(items, rng)
