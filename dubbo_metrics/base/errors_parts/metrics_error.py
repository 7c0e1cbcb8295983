"""
Structured metrics error exception type.

Only the SDK lifecycle wrapper raises this; the registry and collectors
degrade silently instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class MetricsError(Exception):
    """Represents a metrics failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        scope: Service or instrumentation scope the error relates to.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    scope: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        where = f" [{self.scope}]" if self.scope else ""
        return f"{self.code.value}{where}: {self.message}"


__all__ = ["MetricsError"]
