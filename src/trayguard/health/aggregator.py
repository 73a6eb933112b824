"""Fan-out probing of all endpoints into one AggregateHealth snapshot."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import UTC, datetime

from trayguard.health.models import AggregateHealth, Endpoint, ServiceHealth
from trayguard.health.probe import probe

logger = logging.getLogger(__name__)

Prober = Callable[[str, int, float], Awaitable[bool]]


async def probe_all(
    endpoints: Sequence[Endpoint],
    timeout: float = 1.0,
    prober: Prober = probe,
) -> AggregateHealth:
    """Probe every endpoint concurrently and return a fresh snapshot."""
    results = await asyncio.gather(
        *(prober(e.address, e.port, timeout) for e in endpoints),
        return_exceptions=True,
    )
    services: list[ServiceHealth] = []
    for endpoint, result in zip(endpoints, results):
        if isinstance(result, BaseException):
            logger.warning("Probe for %s raised: %r", endpoint.name, result)
            healthy = False
        else:
            healthy = bool(result)
        services.append(
            ServiceHealth(
                name=endpoint.name,
                address=endpoint.address,
                port=endpoint.port,
                healthy=healthy,
            )
        )
    return AggregateHealth(services=tuple(services), checked_at=datetime.now(UTC))


def has_changed(previous: AggregateHealth, current: AggregateHealth) -> bool:
    """True when the overall status or any single service flipped."""
    if previous.overall != current.overall:
        return True
    before = [(s.name, s.healthy) for s in previous.services]
    after = [(s.name, s.healthy) for s in current.services]
    return before != after


class Aggregator:
    """The fixed, ordered endpoint set plus the probe timeout used each tick."""

    def __init__(
        self,
        endpoints: Sequence[Endpoint],
        timeout: float = 1.0,
        prober: Prober = probe,
    ) -> None:
        self._endpoints = tuple(endpoints)
        self._timeout = timeout
        self._prober = prober

    def initial(self) -> AggregateHealth:
        return AggregateHealth.initial(self._endpoints)

    async def run(self) -> AggregateHealth:
        return await probe_all(self._endpoints, timeout=self._timeout, prober=self._prober)
