"""Unit tests for MeterRegistry handle caching and degradation."""
from __future__ import annotations

import json
from typing import Any, List, Tuple

from opentelemetry.metrics import Observation

from dubbo_metrics.base.dto import MeterCollectorOptions, MetricOptions
from dubbo_metrics.base.errors import ErrorCode
from dubbo_metrics.base.metrics import MeterRegistry
from dubbo_metrics.base.metrics.registry_parts import meter_registry as registry_module


class _RecordingMeter:
    """Meter wrapper recording every instrument creation request."""

    def __init__(self, inner: Any, created: List[Tuple[str, str]], fail_first: int = 0) -> None:
        self._inner = inner
        self._created = created
        self._fail_remaining = fail_first

    def _maybe_fail(self) -> None:
        if self._fail_remaining > 0:
            self._fail_remaining -= 1
            raise RuntimeError("backend refused instrument")

    def create_counter(self, name, unit="", description=""):
        self._created.append(("counter", name))
        self._maybe_fail()
        return self._inner.create_counter(name, unit=unit, description=description)

    def create_observable_counter(self, name, callbacks=None, unit="", description=""):
        self._created.append(("observable-counter", name))
        self._maybe_fail()
        return self._inner.create_observable_counter(name, callbacks=callbacks, unit=unit, description=description)


class _RecordingMeterProvider:
    def __init__(self, inner: Any, fail_first: int = 0) -> None:
        self._inner = inner
        self.created: List[Tuple[str, str]] = []
        self.scopes: List[Tuple[str, str]] = []
        self._fail_first = fail_first

    def get_meter(self, name, version=None, schema_url=None, attributes=None):
        self.scopes.append((name, version))
        return _RecordingMeter(self._inner.get_meter(name, version, schema_url), self.created, self._fail_first)


class _BrokenMeterProvider:
    def get_meter(self, name, version=None, schema_url=None, attributes=None):
        raise RuntimeError("no backend")


def _events(err: str) -> List[dict]:
    out = []
    for line in err.splitlines():
        try:
            payload = json.loads(line)
        except ValueError:
            continue
        if "event" in payload:
            out.append(payload)
    return out


def test_default_scope_descriptor(meter_provider):
    recording = _RecordingMeterProvider(meter_provider)
    registry = MeterRegistry(meter_provider=recording)
    assert (registry.scope, registry.version) == ("dubbo-js", "0.0.1")
    assert recording.scopes == [("dubbo-js", "0.0.1")]


def test_scope_descriptor_from_options_and_environment(monkeypatch, meter_provider):
    monkeypatch.setenv("DUBBO_METRICS_SCOPE_NAME", "greeter-svc")
    registry = MeterRegistry(MeterCollectorOptions(version="2.1.0"), meter_provider=meter_provider)
    assert registry.scope == "greeter-svc"
    assert registry.version == "2.1.0"


def test_same_name_returns_identical_handle_without_new_registration(meter_provider):
    recording = _RecordingMeterProvider(meter_provider)
    registry = MeterRegistry(meter_provider=recording)

    first = registry.get_counter("calls_total", MetricOptions(description="calls"))
    second = registry.get_counter("calls_total")
    assert first is not None
    assert first is second
    assert recording.created == [("counter", "calls_total")]


def test_counter_and_observable_counter_are_cached_separately(meter_provider):
    recording = _RecordingMeterProvider(meter_provider)
    registry = MeterRegistry(meter_provider=recording)

    counter = registry.get_counter("dup")
    observable = registry.get_observable_counter("dup", callbacks=[lambda options: [Observation(1)]])
    assert counter is not None and observable is not None
    assert counter is not observable
    assert registry.cached_keys() == ["counter-dup", "observable-counter-dup"]
    assert registry.get_observable_counter("dup") is observable
    assert len(recording.created) == 2


def test_observable_callback_is_polled_by_backend(meter_provider, collect_points):
    registry = MeterRegistry(meter_provider=meter_provider)
    registry.get_observable_counter("observed_total", callbacks=[lambda options: [Observation(7)]])
    points = collect_points()
    assert [p.value for p in points["observed_total"]] == [7]


def test_headless_registry_returns_none(capsys):
    registry = MeterRegistry()
    assert registry.is_headless
    assert registry.get_counter("x") is None
    assert registry.get_observable_counter("y") is None
    assert registry.cached_keys() == []


def test_meter_binding_failure_degrades_to_headless(capsys):
    registry = MeterRegistry(meter_provider=_BrokenMeterProvider())
    assert registry.is_headless
    assert registry.get_counter("x") is None
    events = _events(capsys.readouterr().err)
    failed = [e for e in events if e["event"] == "registry.meter_unavailable"]
    assert failed and failed[0]["error_code"] == ErrorCode.BACKEND_UNAVAILABLE.value


def test_creation_failure_is_not_cached_and_retried(meter_provider, capsys):
    recording = _RecordingMeterProvider(meter_provider, fail_first=1)
    registry = MeterRegistry(meter_provider=recording)

    assert registry.get_counter("flaky_total") is None
    assert registry.cached_keys() == []
    events = _events(capsys.readouterr().err)
    failed = [e for e in events if e["event"] == "registry.handle_failed"]
    assert failed[0]["metric"] == "flaky_total"
    assert failed[0]["error_code"] == ErrorCode.HANDLE_CREATION_FAILED.value

    handle = registry.get_counter("flaky_total")
    assert handle is not None
    assert recording.created == [("counter", "flaky_total"), ("counter", "flaky_total")]


def test_shutdown_clears_cache_and_is_idempotent(meter_provider):
    recording = _RecordingMeterProvider(meter_provider)
    registry = MeterRegistry(meter_provider=recording)
    registry.get_counter("a")
    registry.get_counter("b")
    assert len(registry.cached_keys()) == 2

    registry.shutdown()
    registry.shutdown()
    assert registry.cached_keys() == []


def test_from_global_provider_uses_global_lookup(monkeypatch, meter_provider):
    monkeypatch.setattr(registry_module.otel_metrics, "get_meter_provider", lambda: meter_provider)
    registry = MeterRegistry.from_global_provider(MeterCollectorOptions(name="global-scope"))
    assert not registry.is_headless
    assert registry.scope == "global-scope"
    assert registry.get_counter("g") is not None
