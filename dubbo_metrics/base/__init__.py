"""
dubbo_metrics base package

Backend-agnostic building blocks: option DTOs, error taxonomy, structured
logging, and the metrics core (rate counter, handle registry, collectors).
"""

from .dto import MeterCollectorOptions, MetricOptions
from .errors import ErrorCode, MetricsError
from .logging import LogContext, configure_logger, get_logger, log_event
from .metrics import (
    CONSUMER_ROLE,
    PROVIDER_ROLE,
    MeterRegistry,
    MeterRole,
    RateCounter,
    RateSnapshot,
    RoleMeterCollector,
    create_consumer_collector,
    create_provider_collector,
)

__all__ = [
    # DTOs
    "MeterCollectorOptions",
    "MetricOptions",
    # Errors
    "ErrorCode",
    "MetricsError",
    # Logging
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
    # Metrics
    "CONSUMER_ROLE",
    "PROVIDER_ROLE",
    "MeterRegistry",
    "MeterRole",
    "RateCounter",
    "RateSnapshot",
    "RoleMeterCollector",
    "create_consumer_collector",
    "create_provider_collector",
]
