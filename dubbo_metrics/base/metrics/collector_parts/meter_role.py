"""Role descriptor parametrizing a :class:`RoleMeterCollector`.

A role fixes the metric-name prefix and the wording used in metric
descriptions and log events. The provider and consumer roles differ only in
these strings.
"""

from __future__ import annotations

from dataclasses import dataclass

from ....config.defaults import CONSUMER_METRIC_PREFIX, PROVIDER_METRIC_PREFIX


@dataclass(frozen=True)
class MeterRole:
    """Naming scheme for one side of a remote call.

    Attributes:
        name: Short role identifier (``"provider"`` or ``"consumer"``).
        metric_prefix: Prefix shared by the role's four metric names.
        request_verb: Verb used in descriptions ("received" or "sent").
    """

    name: str
    metric_prefix: str
    request_verb: str = "received"

    @property
    def requests_total(self) -> str:
        return f"{self.metric_prefix}_requests_total"

    @property
    def requests_succeed_total(self) -> str:
        return f"{self.metric_prefix}_requests_succeed_total"

    @property
    def requests_failed_total(self) -> str:
        return f"{self.metric_prefix}_requests_failed_total"

    @property
    def qps_total(self) -> str:
        return f"{self.metric_prefix}_qps_total"

    def event(self, action: str) -> str:
        """Return the log event name for ``action`` (e.g. ``provider.request``)."""
        return f"{self.name}.{action}"


PROVIDER_ROLE = MeterRole(name="provider", metric_prefix=PROVIDER_METRIC_PREFIX, request_verb="received")
CONSUMER_ROLE = MeterRole(name="consumer", metric_prefix=CONSUMER_METRIC_PREFIX, request_verb="sent")

__all__ = ["MeterRole", "PROVIDER_ROLE", "CONSUMER_ROLE"]
