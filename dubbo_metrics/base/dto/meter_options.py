"""Option objects for meter registries and individual metrics.

Purpose
-------
Small, backend-agnostic DTOs describing the instrumentation scope a registry
binds to and the descriptive metadata of each metric it creates.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()`` convenience.

Failure modes & side effects
----------------------------
- Pure data containers. Pydantic raises ``ValidationError`` for values of the
  wrong type; empty strings for ``name``/``version`` are treated as unset.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...config.env import get_metrics_settings


class MeterCollectorOptions(BaseModel):
    """Instrumentation scope descriptor for a meter registry.

    Attributes
    ----------
    name:
        Name of the instrumentation scope. Defaults to the configured scope
        name (``"dubbo-js"`` unless overridden by environment).
    version:
        Version of the instrumentation scope. Defaults to the configured
        scope version (``"0.0.1"``).
    schema_url:
        Optional OpenTelemetry schema URL forwarded to ``get_meter``.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    version: Optional[str] = None
    schema_url: Optional[str] = None

    @field_validator("name", "version", mode="after")
    @classmethod
    def _blank_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    def resolved_name(self) -> str:
        """Return the scope name, falling back to configured defaults."""
        return self.name or get_metrics_settings().scope_name

    def resolved_version(self) -> str:
        """Return the scope version, falling back to configured defaults."""
        return self.version or get_metrics_settings().scope_version


class MetricOptions(BaseModel):
    """Descriptive metadata attached to a metric when it is created."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    unit: str = ""


__all__ = ["MeterCollectorOptions", "MetricOptions"]
