"""Time sources handed to the formatter.

A clock is any zero-argument callable returning epoch milliseconds.
"""

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def fixed_clock(timestamp: int) -> Clock:
    """Return a clock that always reports *timestamp*."""

    def _clock() -> int:
        return timestamp

    return _clock
