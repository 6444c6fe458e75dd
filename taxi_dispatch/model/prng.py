"""Seeded linear-congruential generator for reproducible simulation runs."""

from typing import Sequence, TypeVar

T = TypeVar('T')

_MULTIPLIER = 1103515245
_INCREMENT = 12345
_MASK = 0x7FFFFFFF
_MODULUS = _MASK + 1


class LCG:
    """
    31-bit linear-congruential generator.

    state(n+1) = (state(n) * 1103515245 + 12345) mod 2^31
    next()     = state(n+1) / 2^31, always in [0, 1)

    Instances never share state, so every component that needs randomness
    is handed its own generator.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self.state = seed & _MASK

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self.state = (self.state * _MULTIPLIER + _INCREMENT) & _MASK
        return self.state / _MODULUS

    def randint(self, n: int) -> int:
        """Return an integer in [0, n)."""
        return int(self.next() * n)

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly from a non-empty sequence."""
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.randint(len(items))]

    def reset(self) -> None:
        """Rewind to the initial seed."""
        self.state = self.seed & _MASK

    def __repr__(self) -> str:
        return f"LCG(seed={self.seed}, state={self.state})"
