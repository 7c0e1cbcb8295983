"""Configuration layer for dubbo_metrics.

Merge order (later wins): built-in defaults -> environment variables ->
explicit options passed to constructors.
"""
from __future__ import annotations

from .defaults import (
    CONSUMER_METRIC_PREFIX,
    DEFAULT_SCOPE_NAME,
    DEFAULT_SCOPE_VERSION,
    DEFAULT_SERVICE_NAME,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    PROVIDER_METRIC_PREFIX,
    RATE_RETENTION_SECONDS,
)
from .env import MetricsSettings, get_metrics_settings, reset_metrics_settings

__all__ = [
    "CONSUMER_METRIC_PREFIX",
    "DEFAULT_SCOPE_NAME",
    "DEFAULT_SCOPE_VERSION",
    "DEFAULT_SERVICE_NAME",
    "DEFAULT_SWEEP_INTERVAL_SECONDS",
    "PROVIDER_METRIC_PREFIX",
    "RATE_RETENTION_SECONDS",
    "MetricsSettings",
    "get_metrics_settings",
    "reset_metrics_settings",
]
