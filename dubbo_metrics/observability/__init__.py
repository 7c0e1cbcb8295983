"""OpenTelemetry SDK lifecycle wrapper.

Kept apart from :mod:`dubbo_metrics.base` so the metrics core depends on the
OpenTelemetry API alone.
"""

from .sdk import Observable, ObservableOptions, create_observable, validate_open_telemetry_option

__all__ = ["Observable", "ObservableOptions", "create_observable", "validate_open_telemetry_option"]
