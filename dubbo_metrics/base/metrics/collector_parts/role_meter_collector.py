"""Request metrics collector for one side (provider or consumer) of a call.

The collector owns a :class:`MeterRegistry` delegate and registers the role's
four metrics up front:

- ``<prefix>_requests_total``: every request event.
- ``<prefix>_requests_succeed_total``: requests that completed successfully.
- ``<prefix>_requests_failed_total``: requests that failed.
- ``<prefix>_qps_total``: observable counter reporting the request count of
  the last completed second.

The rate counter behind the qps metric is created on the first request event
only. Until then the qps callback yields no observation, so dashboards see
"no data" rather than zero for a collector that never saw traffic.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Iterable, Optional

from opentelemetry.metrics import CallbackOptions, Counter, MeterProvider, Observation, ObservableCounter
from opentelemetry.util.types import Attributes

from ...dto import MeterCollectorOptions, MetricOptions
from ...logging import LogContext, get_logger, log_event
from ..rate_parts import RateCounter
from ..registry_parts import MeterRegistry
from .meter_role import MeterRole


class RoleMeterCollector:
    """Request, success, failure and qps metrics for a single role.

    Args:
        role: Naming scheme for the collected metrics.
        options: Instrumentation scope; defaults apply when omitted.
        meter_provider: Backend to register metrics with. ``None`` runs the
            collector headless: every event method is a no-op.
        rate_counter_factory: Builds the rate counter on the first request.
    """

    def __init__(
        self,
        role: MeterRole,
        options: Optional[MeterCollectorOptions] = None,
        meter_provider: Optional[MeterProvider] = None,
        rate_counter_factory: Callable[[], RateCounter] = RateCounter,
    ) -> None:
        self._role = role
        self._registry = MeterRegistry(options, meter_provider=meter_provider)
        self._rate_counter_factory = rate_counter_factory
        self._rate_counter: Optional[RateCounter] = None
        self._lock = RLock()
        self._closed = False
        self._logger = get_logger(__name__)

        self._requests_total: Optional[Counter] = self._registry.get_counter(
            role.requests_total,
            MetricOptions(description=f"The total number of {role.request_verb} requests by the {role.name}"),
        )
        self._requests_succeed_total: Optional[Counter] = self._registry.get_counter(
            role.requests_succeed_total,
            MetricOptions(
                description=f"The total number of successfully {role.request_verb} requests by the {role.name}"
            ),
        )
        self._requests_failed_total: Optional[Counter] = self._registry.get_counter(
            role.requests_failed_total,
            MetricOptions(
                description=f"The total number of unsuccessfully {role.request_verb} requests by the {role.name}"
            ),
        )
        self._qps: Optional[ObservableCounter] = self._registry.get_observable_counter(
            role.qps_total,
            MetricOptions(description=f"The number of requests {role.request_verb} by the {role.name} per second"),
            callbacks=[self._observe_rate],
        )

    @property
    def role(self) -> MeterRole:
        return self._role

    @property
    def registry(self) -> MeterRegistry:
        return self._registry

    @property
    def rate_counter(self) -> Optional[RateCounter]:
        """The rate counter, or ``None`` until the first request event."""
        return self._rate_counter

    @property
    def closed(self) -> bool:
        return self._closed

    def _ctx(self, metric: Optional[str] = None) -> LogContext:
        return LogContext(scope=self._registry.scope, version=self._registry.version, role=self._role.name, metric=metric)

    def _observe_rate(self, options: CallbackOptions) -> Iterable[Observation]:
        # Polled from the SDK collection thread; must only read.
        rate_counter = self._rate_counter
        if rate_counter is None or self._closed:
            return []
        return [Observation(rate_counter.get_rate())]

    def _ensure_rate_counter(self) -> RateCounter:
        rate_counter = self._rate_counter
        if rate_counter is not None:
            return rate_counter
        with self._lock:
            if self._rate_counter is None:
                self._rate_counter = self._rate_counter_factory()
                log_event(
                    self._logger,
                    self._role.event("rate_counter_created"),
                    self._ctx(self._role.qps_total),
                    level=logging.DEBUG,
                )
            return self._rate_counter

    def on_request(self, attributes: Attributes = None) -> None:
        """Record a request.

        Providers call this as soon as a request arrives; consumers call it
        before sending one.
        """
        if self._closed or self._registry.is_headless:
            return
        # each metric degrades on its own; a missing total must not starve qps
        if self._requests_total is not None:
            self._requests_total.add(1, attributes)
        if self._qps is not None:
            self._ensure_rate_counter().increment()

    def on_succeeded(self, attributes: Attributes = None) -> None:
        """Record a request that completed successfully."""
        if self._closed or self._requests_succeed_total is None:
            return
        self._requests_succeed_total.add(1, attributes)

    def on_failed(self, attributes: Attributes = None) -> None:
        """Record a request that failed."""
        if self._closed or self._requests_failed_total is None:
            return
        self._requests_failed_total.add(1, attributes)

    def shutdown(self) -> None:
        """Release cached handles and stop the rate counter. Idempotent.

        The backend keeps the qps instrument and its callback registered, so
        the collector stays reachable from the ``MeterProvider`` until that
        provider is shut down. After this call the callback yields nothing.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._registry.shutdown()
            self._requests_total = None
            self._requests_succeed_total = None
            self._requests_failed_total = None
            self._qps = None
            if self._rate_counter is not None:
                self._rate_counter.stop()
        log_event(self._logger, self._role.event("shutdown"), self._ctx(), level=logging.DEBUG)


__all__ = ["RoleMeterCollector"]
