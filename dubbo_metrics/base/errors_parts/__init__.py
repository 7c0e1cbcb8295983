"""Errors parts package public surface.

Prefer importing from ``dubbo_metrics.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .metrics_error import MetricsError

__all__ = ["ErrorCode", "MetricsError"]
