"""
Normalized metrics error codes (taxonomy).

Values are lowercase snake_case and appear as the ``error_code`` field of
structured log events, so they are a stable contract for log consumers.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated error codes for metrics degradation and lifecycle misuse."""

    BACKEND_UNAVAILABLE = "backend_unavailable"
    HANDLE_CREATION_FAILED = "handle_creation_failed"
    INVALID_CONFIGURATION = "invalid_configuration"
    LIFECYCLE = "lifecycle"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
