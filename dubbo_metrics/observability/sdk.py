"""OpenTelemetry SDK lifecycle management.

Purpose
-------
Own the SDK objects a service needs to actually export the metrics recorded
by :mod:`dubbo_metrics.base.metrics`: one ``Resource`` carrying
``service.name``, an SDK ``MeterProvider`` and an SDK ``TracerProvider``.
The providers are exposed so collectors can be built with explicit injection
instead of relying on process-global state.

Configuration keys
------------------
service_name
    ``service.name`` resource attribute. Defaults to ``"Dubbo"`` (or
    ``DUBBO_METRICS_SERVICE_NAME``).
resource_attributes
    Extra resource attributes merged under ``service.name``.
metric_readers
    SDK ``MetricReader`` instances (e.g. a periodic OTLP exporting reader).
span_processors
    SDK ``SpanProcessor`` instances added to the tracer provider.

Unknown keys are preserved by :func:`validate_open_telemetry_option` and
ignored when building the SDK.

Failure Modes
-------------
- Malformed configuration raises :class:`MetricsError` with
  ``ErrorCode.INVALID_CONFIGURATION`` at construction.
- ``start()`` after ``shutdown()`` raises :class:`MetricsError` with
  ``ErrorCode.LIFECYCLE``.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from opentelemetry import metrics as otel_metrics
from opentelemetry import trace as otel_trace
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from pydantic import BaseModel, Field

from ..base.dto import MeterCollectorOptions
from ..base.errors import ErrorCode, MetricsError
from ..base.logging import LogContext, get_logger, log_event
from ..base.metrics import RoleMeterCollector, create_consumer_collector, create_provider_collector
from ..config.env import get_metrics_settings


class ObservableOptions(BaseModel):
    """Options for :class:`Observable`.

    Attributes
    ----------
    enable:
        Install the SDK providers on ``start()``. Defaults to ``False``. When
        false the configured readers and span processors are never attached
        and the collector helpers return headless collectors.
    configuration:
        SDK configuration; see the module docstring for recognized keys.
    set_global:
        Register the providers as the OpenTelemetry globals on ``start()``.
    """

    enable: bool = False
    configuration: Dict[str, Any] = Field(default_factory=dict)
    set_global: bool = True


def validate_open_telemetry_option(options: Optional[ObservableOptions] = None) -> Dict[str, Any]:
    """Return the effective SDK configuration for ``options``.

    ``service_name`` falls back to the configured default only when it is
    missing or ``None``; every key the caller supplied is kept and wins over
    defaults.
    """
    configuration = dict(options.configuration) if options else {}
    if configuration.get("service_name") is None:
        configuration["service_name"] = get_metrics_settings().service_name
    return configuration


def _ensure_list(configuration: Mapping[str, Any], key: str, item_type: type) -> List[Any]:
    items = configuration.get(key) or []
    if not isinstance(items, (list, tuple)) or not all(isinstance(i, item_type) for i in items):
        raise MetricsError(
            code=ErrorCode.INVALID_CONFIGURATION,
            message=f"{key} must be a list of {item_type.__name__}",
            scope=str(configuration.get("service_name")),
        )
    return list(items)


def _build_resource(configuration: Mapping[str, Any]) -> Resource:
    extra = configuration.get("resource_attributes") or {}
    if not isinstance(extra, Mapping):
        raise MetricsError(
            code=ErrorCode.INVALID_CONFIGURATION,
            message="resource_attributes must be a mapping",
            scope=str(configuration.get("service_name")),
        )
    return Resource.create({**extra, SERVICE_NAME: configuration["service_name"]})


class Observable:
    """Manage the complete lifecycle of the OpenTelemetry SDK providers."""

    def __init__(self, options: Optional[ObservableOptions] = None) -> None:
        self._options = options or ObservableOptions()
        self._configuration = validate_open_telemetry_option(self._options)
        self._logger = get_logger(__name__)
        resource = _build_resource(self._configuration)
        readers = _ensure_list(self._configuration, "metric_readers", MetricReader)
        processors = _ensure_list(self._configuration, "span_processors", SpanProcessor)
        if not self._options.enable:
            # a disabled wrapper validates its configuration but never exports
            readers, processors = [], []
        self._meter_provider = MeterProvider(metric_readers=readers, resource=resource)
        self._tracer_provider = TracerProvider(resource=resource)
        for processor in processors:
            self._tracer_provider.add_span_processor(processor)
        self._started = False
        self._shut_down = False

    @property
    def configuration(self) -> Dict[str, Any]:
        return dict(self._configuration)

    @property
    def service_name(self) -> str:
        return self._configuration["service_name"]

    @property
    def meter_provider(self) -> MeterProvider:
        return self._meter_provider

    @property
    def tracer_provider(self) -> TracerProvider:
        return self._tracer_provider

    @property
    def started(self) -> bool:
        return self._started

    def _ctx(self) -> LogContext:
        return LogContext(extra={"service_name": self.service_name})

    def start(self) -> None:
        """Install the providers. A disabled wrapper only logs. Idempotent."""
        if self._shut_down:
            raise MetricsError(
                code=ErrorCode.LIFECYCLE,
                message="cannot start after shutdown",
                scope=self.service_name,
            )
        if self._started:
            return
        if not self._options.enable:
            log_event(self._logger, "observable.disabled", self._ctx(), level=logging.DEBUG)
            return
        if self._options.set_global:
            otel_metrics.set_meter_provider(self._meter_provider)
            otel_trace.set_tracer_provider(self._tracer_provider)
        self._started = True
        log_event(self._logger, "observable.start", self._ctx(), set_global=self._options.set_global)

    def shutdown(self) -> None:
        """Flush and shut down both providers once. Idempotent."""
        if self._shut_down:
            return
        self._shut_down = True
        self._started = False
        self._meter_provider.shutdown()
        self._tracer_provider.shutdown()
        log_event(self._logger, "observable.shutdown", self._ctx())

    def _collector_backend(self) -> Optional[MeterProvider]:
        return self._meter_provider if self._options.enable else None

    def provider_collector(self, options: Optional[MeterCollectorOptions] = None) -> RoleMeterCollector:
        """Return a provider-side collector bound to this SDK's meter provider.

        A disabled wrapper hands out headless collectors.
        """
        return create_provider_collector(options, meter_provider=self._collector_backend())

    def consumer_collector(self, options: Optional[MeterCollectorOptions] = None) -> RoleMeterCollector:
        """Return a consumer-side collector bound to this SDK's meter provider.

        A disabled wrapper hands out headless collectors.
        """
        return create_consumer_collector(options, meter_provider=self._collector_backend())


def create_observable(options: Optional[ObservableOptions] = None) -> Observable:
    """Create a new :class:`Observable`."""
    return Observable(options)


__all__ = ["Observable", "ObservableOptions", "create_observable", "validate_open_telemetry_option"]
