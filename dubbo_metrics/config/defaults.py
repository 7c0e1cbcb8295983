"""dubbo_metrics.config.defaults
=============================

Central place for the small, stable default values used across the
dubbo_metrics package. Environment overrides are resolved in
:mod:`dubbo_metrics.config.env`; this module only holds plain constants.

This module intentionally avoids importing from other dubbo_metrics packages
to prevent circular dependencies.
"""

from __future__ import annotations

# ---- Instrumentation scope ----
DEFAULT_SCOPE_NAME = "dubbo-js"
DEFAULT_SCOPE_VERSION = "0.0.1"

# ---- SDK lifecycle ----
DEFAULT_SERVICE_NAME = "Dubbo"

# ---- Rate counter ----
# Buckets older than this many seconds are evicted by the sweep, so at most
# RATE_RETENTION_SECONDS + 1 trailing seconds are retained.
RATE_RETENTION_SECONDS = 5
DEFAULT_SWEEP_INTERVAL_SECONDS = 1.0

# ---- Metric names ----
PROVIDER_METRIC_PREFIX = "dubbo_provider"
CONSUMER_METRIC_PREFIX = "dubbo_consumer"

__all__ = [
    "DEFAULT_SCOPE_NAME",
    "DEFAULT_SCOPE_VERSION",
    "DEFAULT_SERVICE_NAME",
    "RATE_RETENTION_SECONDS",
    "DEFAULT_SWEEP_INTERVAL_SECONDS",
    "PROVIDER_METRIC_PREFIX",
    "CONSUMER_METRIC_PREFIX",
]
