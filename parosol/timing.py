"""Named wall-clock timers."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class Timing:
    """Minimum, average and maximum of a measured time in seconds."""

    min: float
    avg: float
    max: float

    def __str__(self) -> str:
        return f"avg: {self.avg:g} min: {self.min:g} max: {self.max:g}"


class Timer:
    """A set of named timers that can be started, stopped and restarted.

    Time measured between several start/stop pairs is accumulated until the
    timer is started afresh.
    """

    def __init__(self) -> None:
        self._running: dict[str, float] = {}
        self._elapsed: dict[str, float] = {}

    def start(self, name: str) -> None:
        """Reset the timer ``name`` and start it."""
        self._elapsed[name] = 0.0
        self._running[name] = time.perf_counter()

    def restart(self, name: str) -> None:
        """Start the timer ``name`` again, keeping the time already measured."""
        self._elapsed.setdefault(name, 0.0)
        self._running[name] = time.perf_counter()

    def stop(self, name: str) -> None:
        """Stop the running timer ``name`` and add the time to its total."""
        now = time.perf_counter()
        try:
            begin = self._running.pop(name)
        except KeyError:
            raise KeyError(f"timer {name!r} is not running") from None
        self._elapsed[name] = self._elapsed.get(name, 0.0) + (now - begin)

    def elapsed_time(self, name: str) -> Timing:
        """Return the accumulated time of ``name``; zero if never measured."""
        value = self._elapsed.get(name, 0.0)
        return Timing(min=value, avg=value, max=value)