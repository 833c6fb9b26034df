"""Periodic callbacks without threads.

The engine only ever asks for "call this every N seconds" and keeps the
returned handle to cancel it.  ``PollingScheduler`` runs due callbacks when
its owner calls ``run_pending()``, so a frontend drives it from whatever loop
it already has (key polling, a pygame frame loop, a test advancing a fake
clock).
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """A scheduled periodic callback that can be stopped."""

    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Anything that can call a function repeatedly at a fixed interval."""

    def call_every(
        self, interval: float, callback: Callable[[], None]
    ) -> TimerHandle: ...


class PollingTimer:
    __slots__ = ("interval", "callback", "next_due", "_active")

    def __init__(
        self, interval: float, callback: Callable[[], None], next_due: float
    ) -> None:
        self.interval = interval
        self.callback = callback
        self.next_due = next_due
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class PollingScheduler:
    """Cooperative scheduler fired from ``run_pending()``."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._timers: list[PollingTimer] = []

    def call_every(
        self, interval: float, callback: Callable[[], None]
    ) -> PollingTimer:
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}.")
        timer = PollingTimer(interval, callback, self.clock() + interval)
        self._timers.append(timer)
        return timer

    def run_pending(self) -> int:
        """Fire every callback that is due, earliest first.

        A timer that fell behind fires once per missed interval.  Timers
        scheduled from inside a callback are not due until a later call.
        Returns the number of callbacks fired.
        """
        now = self.clock()
        fired = 0
        while True:
            self._timers = [t for t in self._timers if t.active]
            due = [t for t in self._timers if t.next_due <= now]
            if not due:
                return fired
            timer = min(due, key=lambda t: t.next_due)
            timer.next_due += timer.interval
            timer.callback()
            fired += 1

    def time_until_next(self) -> float | None:
        """Seconds until the next callback is due, ``None`` if idle."""
        active = [t.next_due for t in self._timers if t.active]
        if not active:
            return None
        return max(0.0, min(active) - self.clock())

    def cancel_all(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
