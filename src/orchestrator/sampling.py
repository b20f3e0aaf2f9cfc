"""Deterministic random stream helpers.

All random draws made while generating a puzzle come from one
``random.Random`` instance created here and threaded through the generator
and the solver, so a fixed seed always reproduces the same puzzle.
"""

from __future__ import annotations

import hashlib
import random
from typing import Any, List, MutableSequence

__all__ = ["derive_seed", "make_rng", "shuffle", "shuffled_range"]


def derive_seed(seed: int | str) -> int:
    """Map ``seed`` to a non-negative integer.

    Integers are returned unchanged.  Strings that spell an integer are
    parsed (``0x`` prefixes included); any other string uses the first eight
    bytes of its SHA256 digest as an unsigned integer.
    """

    if isinstance(seed, bool):
        raise TypeError("seed must be an int or str")
    if isinstance(seed, int):
        if seed < 0:
            raise ValueError("seed must be non-negative")
        return seed
    if isinstance(seed, str):
        text = seed.strip()
        try:
            value = int(text, 0)
        except ValueError:
            digest = hashlib.sha256(text.encode("utf-8")).digest()
            return int.from_bytes(digest[:8], "big", signed=False)
        if value < 0:
            raise ValueError("seed must be non-negative")
        return value
    raise TypeError(f"Unsupported seed type: {type(seed)!r}")


def make_rng(seed: int | str | None) -> random.Random:
    """Return a generator seeded from ``seed`` (system entropy for ``None``)."""

    if seed is None:
        return random.Random()
    return random.Random(derive_seed(seed))


def shuffle(items: MutableSequence[Any], rng: random.Random) -> None:
    """Permute ``items`` in place with Fisher-Yates.

    Draws ``rng.randrange(i + 1)`` for ``i`` from the last index down to 1,
    so sequences of length 0 or 1 consume nothing.
    """

    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]


def shuffled_range(n: int, start: int, rng: random.Random) -> List[int]:
    """Return ``start .. start + n - 1`` in random order."""

    numbers = list(range(start, start + n))
    shuffle(numbers, rng)
    return numbers
