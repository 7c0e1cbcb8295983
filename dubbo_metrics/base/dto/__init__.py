"""Data transfer objects for dubbo_metrics configuration surfaces."""

from .meter_options import MeterCollectorOptions, MetricOptions

__all__ = ["MeterCollectorOptions", "MetricOptions"]
