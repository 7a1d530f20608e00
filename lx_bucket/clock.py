"""
Monotonic time sources.

A clock is any zero-argument callable returning integer milliseconds from
an arbitrary but fixed origin. Buckets only ever subtract two readings of
the same clock, so the origin does not matter.
"""

import time
from typing import Callable


Clock = Callable[[], int]


def monotonic_ms() -> int:
    """Read the process monotonic clock in milliseconds."""
    return time.monotonic_ns() // 1_000_000


class ManualClock:
    """Clock that only moves when told to.

    Used in tests and simulations to control elapsed time without
    sleeping.
    """

    def __init__(self, start_ms: int = 0):
        self._now = int(start_ms)

    def __call__(self) -> int:
        return self._now

    @property
    def now(self) -> int:
        return self._now

    def advance(self, ms: int = 0, seconds: float = 0.0) -> int:
        """Move the clock forward and return the new reading."""
        step = int(ms) + int(round(seconds * 1000))
        if step < 0:
            raise ValueError("ManualClock cannot advance by a negative amount; use set()")
        self._now += step
        return self._now

    def set(self, ms: int) -> int:
        """Jump to an absolute reading, backwards included."""
        self._now = int(ms)
        return self._now
