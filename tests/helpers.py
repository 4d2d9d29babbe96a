from typing import Any, MutableSequence


class FixedRandom:
    """Random source that never reorders and always returns the low bound."""

    def randint(self, a: int, b: int) -> int:
        return a

    def shuffle(self, x: MutableSequence[Any]) -> None:
        return None
