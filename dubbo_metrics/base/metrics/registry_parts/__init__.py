"""One-class-per-file parts for the metric handle registry."""

from .meter_registry import COUNTER_KIND, OBSERVABLE_COUNTER_KIND, MeterRegistry, MetricHandle

__all__ = ["COUNTER_KIND", "OBSERVABLE_COUNTER_KIND", "MeterRegistry", "MetricHandle"]
