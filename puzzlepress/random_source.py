"""Random number source used by the puzzle engines."""

from __future__ import annotations

import random
from typing import Any, MutableSequence, Optional, Protocol


class RandomSource(Protocol):
    """Minimal interface the engines draw randomness from.

    ``random.Random`` satisfies it as-is, so production code passes an
    OS-seeded instance and tests pass ``random.Random(seed)``.
    """

    def randint(self, a: int, b: int) -> int:
        """Return a uniform integer N with ``a <= N <= b``."""

    def shuffle(self, x: MutableSequence[Any]) -> None:
        """Shuffle the sequence in place."""


def default_random_source(seed: Optional[int] = None) -> random.Random:
    """Return a private generator, deterministic when ``seed`` is given."""

    return random.Random(seed)


__all__ = ["RandomSource", "default_random_source"]
