"""Provider- and consumer-side request collectors.

Both sides share :class:`RoleMeterCollector`; these helpers bind it to the
predefined roles so call sites never spell metric prefixes themselves::

    provider = create_provider_collector(meter_provider=provider_from_sdk)
    provider.on_request({"service": "greeter", "method": "SayHello"})
    provider.on_succeeded({"service": "greeter", "method": "SayHello"})
"""

from __future__ import annotations

from typing import Optional

from opentelemetry.metrics import MeterProvider

from ..dto import MeterCollectorOptions
from .collector_parts import CONSUMER_ROLE, PROVIDER_ROLE, MeterRole, RoleMeterCollector


def create_provider_collector(
    options: Optional[MeterCollectorOptions] = None,
    meter_provider: Optional[MeterProvider] = None,
) -> RoleMeterCollector:
    """Return a collector for requests received by a service provider."""
    return RoleMeterCollector(PROVIDER_ROLE, options, meter_provider=meter_provider)


def create_consumer_collector(
    options: Optional[MeterCollectorOptions] = None,
    meter_provider: Optional[MeterProvider] = None,
) -> RoleMeterCollector:
    """Return a collector for requests sent by a service consumer."""
    return RoleMeterCollector(CONSUMER_ROLE, options, meter_provider=meter_provider)


__all__ = [
    "CONSUMER_ROLE",
    "PROVIDER_ROLE",
    "MeterRole",
    "RoleMeterCollector",
    "create_consumer_collector",
    "create_provider_collector",
]
