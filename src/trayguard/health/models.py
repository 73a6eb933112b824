"""Data models for per-service and aggregate health."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol


class OverallStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    DOWN = "down"


class Endpoint(Protocol):
    name: str
    address: str
    port: int


def compute_overall(flags: Iterable[bool]) -> OverallStatus:
    """Collapse per-service results into one status.

    All healthy -> HEALTHY, none healthy (including no services) -> DOWN,
    anything else -> DEGRADED.
    """
    values = list(flags)
    healthy_count = sum(1 for v in values if v)
    if values and healthy_count == len(values):
        return OverallStatus.HEALTHY
    if healthy_count > 0:
        return OverallStatus.DEGRADED
    return OverallStatus.DOWN


@dataclass(frozen=True)
class ServiceHealth:
    """Result of the most recent probe against one endpoint."""

    name: str
    address: str
    port: int
    healthy: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "address": self.address,
            "port": self.port,
            "healthy": self.healthy,
        }


@dataclass(frozen=True)
class AggregateHealth:
    """One immutable snapshot of every monitored service.

    ``overall`` is derived from ``services`` on access and cannot be set.
    """

    services: tuple[ServiceHealth, ...] = ()
    checked_at: datetime | None = None

    @property
    def overall(self) -> OverallStatus:
        return compute_overall(s.healthy for s in self.services)

    @classmethod
    def initial(cls, endpoints: Sequence[Endpoint]) -> AggregateHealth:
        """Snapshot used before the first tick completes: everything down."""
        return cls(
            services=tuple(
                ServiceHealth(name=e.name, address=e.address, port=e.port, healthy=False)
                for e in endpoints
            )
        )

    def get(self, name: str) -> ServiceHealth | None:
        for service in self.services:
            if service.name == name:
                return service
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "services": [s.to_dict() for s in self.services],
            "overall": self.overall.value,
            "checked_at": self.checked_at.isoformat() if self.checked_at else None,
        }
