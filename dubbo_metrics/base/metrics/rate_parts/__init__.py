"""One-class-per-file parts for the sliding-window rate counter."""

from .rate_counter import RateCounter
from .rate_snapshot import RateSnapshot
from .sweep_timer import SweepTimer

__all__ = ["RateCounter", "RateSnapshot", "SweepTimer"]
