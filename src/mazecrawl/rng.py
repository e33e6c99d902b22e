from __future__ import annotations

import logging
from typing import MutableSequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_SEED_SCRAMBLE = 2654435761
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply on unsigned operands."""
    return (a * b) & _MASK32


class Mulberry32:
    """
    Small, fast, well-mixed 32-bit seeded PRNG.

    The whole generator state is one unsigned 32-bit integer, so the same seed
    reproduces the same stream on every platform. Mazes own their instances;
    nothing in the package shares a global generator.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed & _MASK32
        self._state = _imul(self._seed, _SEED_SCRAMBLE)
        logger.debug("Initialized Mulberry32 with seed=%d", seed)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def state(self) -> int:
        """Return the internal 32-bit state for debugging or persistence."""
        return self._state

    def set_state(self, state: int) -> None:
        """Restore the internal 32-bit state."""
        self._state = state & _MASK32

    def next(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        self._state = (self._state + _INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    def next_int(self, max_value: int) -> int:
        """Return an integer in [0, max_value)."""
        return int(self.next() * max_value)

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place; returns the same sequence for chaining."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(i + 1)
            items[i], items[j] = items[j], items[i]
        return items


__all__ = ["Mulberry32"]
