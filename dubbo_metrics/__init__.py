"""dubbo_metrics package

Request-rate metrics for services acting as provider and/or consumer of
remote calls: cumulative request/success/failure counters plus a per-second
request rate (QPS), published through OpenTelemetry.

Public API (re-exported):
    - Version: ``__version__``
    - Collectors: :class:`RoleMeterCollector`, :func:`create_provider_collector`,
      :func:`create_consumer_collector`, ``PROVIDER_ROLE``, ``CONSUMER_ROLE``
    - Building blocks: :class:`MeterRegistry`, :class:`RateCounter`
    - Options: :class:`MeterCollectorOptions`, :class:`MetricOptions`
    - SDK lifecycle: :class:`Observable`, :func:`create_observable`
    - Errors: :class:`MetricsError`, :class:`ErrorCode`

Example::

    from dubbo_metrics import ObservableOptions, create_observable

    sdk = create_observable(ObservableOptions(enable=True, configuration={"metric_readers": [reader]}))
    sdk.start()
    provider = sdk.provider_collector()
    provider.on_request({"service": "greeter"})
"""

from .base.dto import MeterCollectorOptions, MetricOptions
from .base.errors import ErrorCode, MetricsError
from .base.metrics import (
    CONSUMER_ROLE,
    PROVIDER_ROLE,
    MeterRegistry,
    MeterRole,
    RateCounter,
    RoleMeterCollector,
    create_consumer_collector,
    create_provider_collector,
)
from .observability import Observable, ObservableOptions, create_observable

__version__ = "0.0.1"

__all__ = [
    "__version__",
    "CONSUMER_ROLE",
    "PROVIDER_ROLE",
    "ErrorCode",
    "MeterCollectorOptions",
    "MeterRegistry",
    "MeterRole",
    "MetricOptions",
    "MetricsError",
    "Observable",
    "ObservableOptions",
    "RateCounter",
    "RoleMeterCollector",
    "create_consumer_collector",
    "create_observable",
    "create_provider_collector",
]
