"""Deterministic random numbers derived from a string seed.

The same seed string always yields the same stream of floats, which is what
makes a maze reproducible from its seed:

    from seeded_random import derive_generator

    rng = derive_generator("maze-seed")
    rng()  # 0.9293123728130013, on every run and every platform

The seed is hashed with xmur3 into a 32-bit state and the state drives a
mulberry32 generator. All arithmetic is done on unsigned 32-bit integers.
"""

import random
import string
from typing import Callable, List, Optional


Prng = Callable[[], float]

DEFAULT_SEED = "maze-seed"

_MASK32 = 0xFFFFFFFF
_SEED_ALPHABET = string.digits + string.ascii_lowercase


def imul(a: int, b: int) -> int:
    """Multiply two 32-bit integers, keeping the low 32 bits."""

    return (a * b) & _MASK32


def _code_units(text: str) -> List[int]:
    # Hash over UTF-16 code units so non-BMP characters count as two.
    data = text.encode("utf-16-le", "surrogatepass")
    return [
        int.from_bytes(data[i:i + 2], "little")
        for i in range(0, len(data), 2)
    ]


def xmur3(seed: str) -> Callable[[], int]:
    """Return a hash stream for `seed`.

    Each call of the returned function yields the next mixed 32-bit value.
    """

    units = _code_units(seed)
    h = (1779033703 ^ len(units)) & _MASK32
    for unit in units:
        h = imul(h ^ unit, 3432918353)
        h = ((h << 13) | (h >> 19)) & _MASK32

    def next_hash() -> int:
        nonlocal h
        h = imul(h ^ (h >> 16), 2246822507)
        h = imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        return h

    return next_hash


def mulberry32(state: int) -> Prng:
    """Return a generator of floats in [0, 1) seeded with a 32-bit state."""

    a = state & _MASK32

    def draw() -> float:
        nonlocal a
        a = (a + 0x6D2B79F5) & _MASK32
        t = a
        t = imul(t ^ (t >> 15), t | 1)
        t ^= (t + imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    return draw


def derive_generator(seed: Optional[str] = None) -> Prng:
    """Build the draw function used for maze generation.

    An empty or missing seed falls back to DEFAULT_SEED.
    """

    next_hash = xmur3(seed or DEFAULT_SEED)
    return mulberry32(next_hash())


def random_seed(rng: Optional[random.Random] = None) -> str:
    """Return a fresh 8-character base-36 seed for an unseeded new game."""

    source = rng if rng is not None else random.SystemRandom()
    return "".join(source.choice(_SEED_ALPHABET) for _ in range(8))
