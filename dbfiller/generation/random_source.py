"""
Random sources for value generation.

The generator only needs independent uniform draws, so anything with the
`random.Random` interface subset below will do: a seeded `random.Random`
for reproducible runs and tests, or `random.SystemRandom` when the data
should not be predictable.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:
        """Uniform integer in the inclusive range [a, b]."""
        ...

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Uniformly chosen element of a non-empty sequence."""
        ...


def create_random_source(seed: Optional[int] = None, secure: bool = False) -> RandomSource:
    """
    Build the random source for a run.

    `secure` wins over `seed`: the OS entropy source cannot be seeded.
    """
    if secure:
        return random.SystemRandom()
    return random.Random(seed)


__all__ = ["RandomSource", "create_random_source"]
