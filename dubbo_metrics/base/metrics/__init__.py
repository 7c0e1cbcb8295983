"""Request-rate metrics: rate counter, handle registry and role collectors.

Everything here depends on the OpenTelemetry metrics *API* only; the SDK is
wired in by :mod:`dubbo_metrics.observability` or by the embedding service.
"""
from __future__ import annotations

from .collectors import (
    CONSUMER_ROLE,
    PROVIDER_ROLE,
    MeterRole,
    RoleMeterCollector,
    create_consumer_collector,
    create_provider_collector,
)
from .rate_parts import RateCounter, RateSnapshot, SweepTimer
from .registry_parts import MeterRegistry

__all__ = [
    "CONSUMER_ROLE",
    "PROVIDER_ROLE",
    "MeterRegistry",
    "MeterRole",
    "RateCounter",
    "RateSnapshot",
    "RoleMeterCollector",
    "SweepTimer",
    "create_consumer_collector",
    "create_provider_collector",
]
