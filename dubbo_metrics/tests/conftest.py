"""Pytest configuration for the dubbo_metrics test suite.

Provides a controllable wall clock, an SDK ``MeterProvider`` backed by an
``InMemoryMetricReader``, and a helper that collects data points by metric
name. Settings caches are reset around every test so environment overrides
set through ``monkeypatch`` are honored.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List

import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from dubbo_metrics.config import reset_metrics_settings


class FakeClock:
    """Manually advanced clock returning seconds since the Unix epoch."""

    def __init__(self, start: float = 1_715_347_076.25) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Drop cached settings before and after each test."""

    reset_metrics_settings()
    yield
    reset_metrics_settings()


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def metric_reader() -> InMemoryMetricReader:
    return InMemoryMetricReader()


@pytest.fixture()
def meter_provider(metric_reader: InMemoryMetricReader) -> Iterator[MeterProvider]:
    """Yield an SDK meter provider wired to ``metric_reader``; shut down afterwards."""

    provider = MeterProvider(metric_readers=[metric_reader])
    yield provider
    provider.shutdown()


@pytest.fixture()
def collect_points(metric_reader: InMemoryMetricReader) -> Callable[[], Dict[str, List[Any]]]:
    """Return a function running one collection and grouping points by metric name."""

    def _collect() -> Dict[str, List[Any]]:
        points: Dict[str, List[Any]] = {}
        data = metric_reader.get_metrics_data()
        if data is None:
            return points
        for resource_metrics in data.resource_metrics:
            for scope_metrics in resource_metrics.scope_metrics:
                for metric in scope_metrics.metrics:
                    points.setdefault(metric.name, []).extend(metric.data.data_points)
        return points

    return _collect
