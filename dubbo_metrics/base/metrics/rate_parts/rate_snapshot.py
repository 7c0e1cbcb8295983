"""Rate counter snapshot dataclass."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class RateSnapshot:
    """Immutable point-in-time view of a :class:`RateCounter`.

    Attributes:
        current_second: Second the snapshot was taken in.
        rate: Count of the last completed second (what ``get_rate`` returns).
        buckets: Copy of the retained ``second -> count`` tallies.
    """

    current_second: int
    rate: int
    buckets: Dict[int, int]

    def to_dict(self) -> Dict[str, Any]:
        """Return a dictionary representation suitable for JSON serialization."""
        data = asdict(self)
        data["buckets"] = {str(k): v for k, v in sorted(self.buckets.items())}
        return data


__all__ = ["RateSnapshot"]
