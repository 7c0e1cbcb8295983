"""Recurring background timer driving periodic maintenance callbacks.

A single daemon thread waits on an event with a timeout; each timeout runs
the callback, and :meth:`SweepTimer.cancel` sets the event to end the loop.
Cancellation is idempotent and never joins from the timer thread itself.
"""

from __future__ import annotations

import threading
from typing import Callable


class SweepTimer:
    """Invoke ``callback`` every ``interval`` seconds on a daemon thread."""

    __slots__ = ("_interval", "_callback", "_stopped", "_thread")

    def __init__(self, interval: float, callback: Callable[[], None], *, name: str = "dubbo-metrics-sweep"):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = interval
        self._callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def active(self) -> bool:
        """True while the timer thread is running and not cancelled."""
        return self._thread.is_alive() and not self._stopped.is_set()

    def start(self) -> "SweepTimer":
        self._thread.start()
        return self

    def cancel(self) -> None:
        """Stop future callbacks. Safe to call repeatedly and from any thread."""
        self._stopped.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout=self._interval)

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            self._callback()


__all__ = ["SweepTimer"]
