"""A wall-clock budget measured on a monotonic clock."""

from __future__ import annotations

import time
from typing import Callable


class TimeLimiter:
    """Tracks elapsed time against a limit in seconds."""

    def __init__(self, time_limit_s: float, clock: Callable[[], float] = time.monotonic):
        self.time_limit_s = time_limit_s
        self._clock = clock
        self._start = clock()

    def reset(self) -> None:
        """Restart the measurement from now."""
        self._start = self._clock()

    def elapsed(self) -> float:
        """Seconds since the start."""
        return self._clock() - self._start

    def timed_out(self) -> bool:
        """Whether the limit has been reached."""
        return self.elapsed() >= self.time_limit_s

    def remaining(self) -> float:
        """Seconds left before the limit; negative once exceeded."""
        return self.time_limit_s - self.elapsed()