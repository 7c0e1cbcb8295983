"""Sliding-window per-second event counter.

Events are tallied into buckets keyed by the integer wall-clock second in
which they occurred. ``get_rate`` reports the most recently *completed*
second, never the in-progress one, so a burst is visible exactly one second
after it happened. A background sweep evicts buckets older than
``RATE_RETENTION_SECONDS``, bounding memory regardless of traffic volume.

Example bucket state (second -> count)::

    {1715347076: 10, 1715347077: 10, 1715347078: 10, 1715347079: 20}

Concurrency
-----------
Callers, the sweep thread and the metrics SDK's collection thread may all
touch a counter, so bucket access is guarded by a re-entrant lock.
``get_rate`` and ``snapshot`` only read.
"""

from __future__ import annotations

import math
import time
from threading import RLock
from typing import Callable, Dict, Optional

from ....config.defaults import RATE_RETENTION_SECONDS
from ....config.env import get_metrics_settings
from .rate_snapshot import RateSnapshot
from .sweep_timer import SweepTimer


class RateCounter:
    """Per-second event tally over a short rolling window.

    Args:
        clock: Wall-clock source in seconds since the Unix epoch. Defaults to
            :func:`time.time`; tests inject a fake.
        sweep_interval: Seconds between eviction sweeps. Defaults to the
            configured ``sweep_interval_seconds`` (1.0).
    """

    __slots__ = ("_clock", "_lock", "_buckets", "_timer")

    def __init__(self, clock: Callable[[], float] = time.time, sweep_interval: Optional[float] = None):
        self._clock = clock
        self._lock = RLock()
        self._buckets: Dict[int, int] = {}
        interval = sweep_interval if sweep_interval is not None else get_metrics_settings().sweep_interval_seconds
        self._timer = SweepTimer(interval, self.sweep).start()

    def current_second(self) -> int:
        """Whole seconds elapsed since the Unix epoch, per the injected clock."""
        return math.floor(self._clock())

    def increment(self) -> None:
        """Record one event in the current second."""
        cs = self.current_second()
        with self._lock:
            self._buckets[cs] = self._buckets.get(cs, 0) + 1

    def get_rate(self) -> int:
        """Return the number of events recorded in the last completed second.

        A second with no recorded events reports ``0``; earlier seconds are
        never carried forward.
        """
        with self._lock:
            return self._buckets.get(self.current_second() - 1, 0)

    def sweep(self) -> None:
        """Evict buckets older than the retention window."""
        cutoff = self.current_second() - RATE_RETENTION_SECONDS
        with self._lock:
            for second in [s for s in self._buckets if s < cutoff]:
                del self._buckets[second]

    def stop(self) -> None:
        """Cancel the periodic sweep. Idempotent."""
        self._timer.cancel()

    @property
    def running(self) -> bool:
        """True while the eviction sweep is scheduled."""
        return self._timer.active

    def snapshot(self) -> RateSnapshot:
        with self._lock:
            cs = self.current_second()
            return RateSnapshot(
                current_second=cs,
                rate=self._buckets.get(cs - 1, 0),
                buckets=dict(self._buckets),
            )


__all__ = ["RateCounter"]
