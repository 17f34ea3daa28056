"""Time sources for the request scorer.

The scorer reads wall-clock seconds through a plain zero-argument callable
(``time.time`` by default).  ``ManualClock`` is a controllable stand-in for
tests, benchmarks, and the CLI's simulated ages.
"""
from __future__ import annotations

from typing import Callable

Clock = Callable[[], float]


class ManualClock:
    """A clock that only moves when told to.

    Parameters
    ----------
    start:
        Initial reading, in seconds.

    Example
    -------
    >>> clock = ManualClock(100.0)
    >>> clock.advance(60)
    160.0
    >>> clock()
    160.0
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """Move the clock by ``seconds`` and return the new reading."""
        self._now += seconds
        return self._now

    def set(self, value: float) -> None:
        """Jump to an absolute reading (may move backwards)."""
        self._now = float(value)

    def __repr__(self) -> str:
        return f"ManualClock(now={self._now})"
