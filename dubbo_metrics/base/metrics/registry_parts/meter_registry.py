"""Memoizing registry of OpenTelemetry metric handles.

Purpose
-------
Acquiring an instrument from a meter is a registration operation, and callers
may ask for the same named metric on every request. ``MeterRegistry`` binds
one meter for its instrumentation scope and caches each created handle under
``"<kind>-<name>"`` so the backend is contacted at most once per metric.

Design
------
- The ``MeterProvider`` is injected. ``None`` means headless operation: no
  meter is bound and every getter returns ``None``.
- ``from_global_provider`` is the explicit opt-in for resolving the
  process-global provider.

Failure Modes
-------------
- Meter binding and instrument creation failures are logged as structured
  warnings and reported as ``None``; nothing is cached for the failing key,
  so the next call retries. No exception reaches the caller.
"""
from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Dict, Optional, Sequence, Union

from opentelemetry import metrics as otel_metrics
from opentelemetry.metrics import (
    CallbackT,
    Counter,
    Meter,
    MeterProvider,
    ObservableCounter,
)

from ...dto import MeterCollectorOptions, MetricOptions
from ...errors import ErrorCode
from ...logging import LogContext, get_logger, log_event

MetricHandle = Union[Counter, ObservableCounter]

COUNTER_KIND = "counter"
OBSERVABLE_COUNTER_KIND = "observable-counter"


class MeterRegistry:
    """Lazily create and cache metric handles for one instrumentation scope."""

    def __init__(
        self,
        options: Optional[MeterCollectorOptions] = None,
        meter_provider: Optional[MeterProvider] = None,
    ) -> None:
        self._options = options or MeterCollectorOptions()
        self._scope = self._options.resolved_name()
        self._version = self._options.resolved_version()
        self._logger = get_logger(__name__)
        self._lock = RLock()
        self._cache: Dict[str, MetricHandle] = {}
        self._meter = self._bind_meter(meter_provider)

    @classmethod
    def from_global_provider(cls, options: Optional[MeterCollectorOptions] = None) -> "MeterRegistry":
        """Build a registry bound to the process-global ``MeterProvider``."""
        return cls(options, meter_provider=otel_metrics.get_meter_provider())

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def version(self) -> str:
        return self._version

    @property
    def is_headless(self) -> bool:
        """True when no meter is bound and every getter returns ``None``."""
        return self._meter is None

    def _ctx(self, metric: Optional[str] = None) -> LogContext:
        return LogContext(scope=self._scope, version=self._version, metric=metric)

    def _bind_meter(self, meter_provider: Optional[MeterProvider]) -> Optional[Meter]:
        if meter_provider is None:
            log_event(self._logger, "registry.headless", self._ctx(), level=logging.DEBUG)
            return None
        try:
            meter = meter_provider.get_meter(self._scope, self._version, schema_url=self._options.schema_url)
        except Exception as exc:  # backend faults must not reach instrumented code
            log_event(
                self._logger,
                "registry.meter_unavailable",
                self._ctx(),
                level=logging.WARNING,
                error_code=ErrorCode.BACKEND_UNAVAILABLE.value,
                error=repr(exc),
            )
            return None
        log_event(self._logger, "registry.meter_bound", self._ctx(), level=logging.DEBUG)
        return meter

    def _get_cached(self, kind: str, name: str, creator: Callable[[Meter], MetricHandle]) -> Optional[MetricHandle]:
        """Return the handle cached under ``"<kind>-<name>"``, creating it on a miss."""
        if self._meter is None:
            return None
        key = f"{kind}-{name}"
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            try:
                handle = creator(self._meter)
            except Exception as exc:  # backend faults must not reach instrumented code
                log_event(
                    self._logger,
                    "registry.handle_failed",
                    self._ctx(name),
                    level=logging.WARNING,
                    kind=kind,
                    error_code=ErrorCode.HANDLE_CREATION_FAILED.value,
                    error=repr(exc),
                )
                return None
            if handle is None:
                return None
            self._cache[key] = handle
        log_event(self._logger, "registry.handle_created", self._ctx(name), level=logging.DEBUG, kind=kind)
        return handle

    def get_counter(self, name: str, options: Optional[MetricOptions] = None) -> Optional[Counter]:
        """Return the cumulative counter ``name``, creating it on first request.

        Suited to quantities whose running sum is of primary interest.
        """
        opts = options or MetricOptions()
        return self._get_cached(  # type: ignore[return-value]
            COUNTER_KIND,
            name,
            lambda meter: meter.create_counter(name, unit=opts.unit, description=opts.description),
        )

    def get_observable_counter(
        self,
        name: str,
        options: Optional[MetricOptions] = None,
        callbacks: Optional[Sequence[CallbackT]] = None,
    ) -> Optional[ObservableCounter]:
        """Return the observable counter ``name``, creating it on first request.

        ``callbacks`` are bound when the instrument is created and ignored on
        cached hits. They are invoked by the SDK's collection cycle, possibly
        concurrently with any other operation, and must only read state.
        """
        opts = options or MetricOptions()
        return self._get_cached(  # type: ignore[return-value]
            OBSERVABLE_COUNTER_KIND,
            name,
            lambda meter: meter.create_observable_counter(
                name,
                callbacks=list(callbacks or ()),
                unit=opts.unit,
                description=opts.description,
            ),
        )

    def cached_keys(self) -> list[str]:
        """Return the cache keys currently held, for diagnostics."""
        with self._lock:
            return sorted(self._cache)

    def shutdown(self) -> None:
        """Drop every cached handle reference. Idempotent."""
        with self._lock:
            dropped = len(self._cache)
            self._cache.clear()
        log_event(self._logger, "registry.shutdown", self._ctx(), level=logging.DEBUG, dropped=dropped)


__all__ = ["MeterRegistry", "MetricHandle", "COUNTER_KIND", "OBSERVABLE_COUNTER_KIND"]
