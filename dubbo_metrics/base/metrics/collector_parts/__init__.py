"""One-class-per-file parts for role-based request collectors."""

from .meter_role import CONSUMER_ROLE, PROVIDER_ROLE, MeterRole
from .role_meter_collector import RoleMeterCollector

__all__ = ["CONSUMER_ROLE", "PROVIDER_ROLE", "MeterRole", "RoleMeterCollector"]
