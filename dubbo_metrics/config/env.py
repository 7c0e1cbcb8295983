"""dubbo_metrics.config.env
========================

Environment-driven settings for the metrics subsystem.

Purpose
-------
- Resolve the handful of tunables that may differ per deployment (default
  instrumentation scope, SDK service name, sweep cadence, log level) from
  environment variables, falling back to :mod:`dubbo_metrics.config.defaults`.
- Parse once and cache, so hot paths never touch ``os.environ``.

Supported environment variables (all optional)
----------------------------------------------
DUBBO_METRICS_SCOPE_NAME
DUBBO_METRICS_SCOPE_VERSION
DUBBO_METRICS_SERVICE_NAME
DUBBO_METRICS_SWEEP_INTERVAL_SECONDS
DUBBO_METRICS_LOG_LEVEL

Failure Modes
-------------
- Invalid or non-positive numeric values fall back to defaults; nothing here
  raises on bad input.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from .defaults import (
    DEFAULT_SCOPE_NAME,
    DEFAULT_SCOPE_VERSION,
    DEFAULT_SERVICE_NAME,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
)

ENV_SCOPE_NAME = "DUBBO_METRICS_SCOPE_NAME"
ENV_SCOPE_VERSION = "DUBBO_METRICS_SCOPE_VERSION"
ENV_SERVICE_NAME = "DUBBO_METRICS_SERVICE_NAME"
ENV_SWEEP_INTERVAL = "DUBBO_METRICS_SWEEP_INTERVAL_SECONDS"
ENV_LOG_LEVEL = "DUBBO_METRICS_LOG_LEVEL"


@dataclass(frozen=True)
class MetricsSettings:
    """Normalized settings resolved from the environment.

    Attributes:
        scope_name: Instrumentation scope name used when options omit one.
        scope_version: Instrumentation scope version used when options omit one.
        service_name: ``service.name`` resource attribute for the SDK wrapper.
        sweep_interval_seconds: Period of the rate counter's eviction sweep.
        log_level: Optional level name for the shared logger.
    """

    scope_name: str = DEFAULT_SCOPE_NAME
    scope_version: str = DEFAULT_SCOPE_VERSION
    service_name: str = DEFAULT_SERVICE_NAME
    sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS
    log_level: Optional[str] = None


_CACHED: MetricsSettings | None = None


def _parse_env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float.

    Returns ``default`` when the variable is unset, not a number, or not
    strictly positive.
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_metrics_settings() -> MetricsSettings:
    """Return the process-cached :class:`MetricsSettings` instance.

    Environment variables are read on first use only; call
    :func:`reset_metrics_settings` to force a re-read.
    """
    global _CACHED  # noqa: PLW0603 - documented module cache
    if _CACHED is not None:
        return _CACHED
    _CACHED = MetricsSettings(
        scope_name=_parse_env_str(ENV_SCOPE_NAME, DEFAULT_SCOPE_NAME),
        scope_version=_parse_env_str(ENV_SCOPE_VERSION, DEFAULT_SCOPE_VERSION),
        service_name=_parse_env_str(ENV_SERVICE_NAME, DEFAULT_SERVICE_NAME),
        sweep_interval_seconds=_parse_env_float(ENV_SWEEP_INTERVAL, DEFAULT_SWEEP_INTERVAL_SECONDS),
        log_level=os.getenv(ENV_LOG_LEVEL) or None,
    )
    return _CACHED


def reset_metrics_settings() -> None:
    """Drop the cached settings so the next lookup re-reads the environment."""
    global _CACHED  # noqa: PLW0603 - documented module cache
    _CACHED = None


__all__ = [
    "ENV_SCOPE_NAME",
    "ENV_SCOPE_VERSION",
    "ENV_SERVICE_NAME",
    "ENV_SWEEP_INTERVAL",
    "ENV_LOG_LEVEL",
    "MetricsSettings",
    "get_metrics_settings",
    "reset_metrics_settings",
]
