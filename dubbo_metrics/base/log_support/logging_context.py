"""Structured logging context for metrics events.

:class:`LogContext` carries the fields shared by most registry and collector
log events (instrumentation scope, collector role, metric name) plus a free
``extra`` bag. ``to_dict`` merges ``extra`` and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for metrics logging events."""

    scope: Optional[str] = None
    version: Optional[str] = None
    role: Optional[str] = None
    metric: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
