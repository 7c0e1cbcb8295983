"""Metrics error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``dubbo_metrics.base.errors_parts``.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.metrics_error import MetricsError

__all__ = ["ErrorCode", "MetricsError"]
