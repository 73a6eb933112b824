"""Background poll loop: probe, store, broadcast, sleep, forever."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from trayguard.events.broadcaster import Broadcaster
from trayguard.health.aggregator import Aggregator, has_changed
from trayguard.health.models import AggregateHealth
from trayguard.health.store import HealthStore

logger = logging.getLogger(__name__)

Sleeper = Callable[[float], Awaitable[None]]


class PollLoop:
    """Drives one tick every ``interval`` seconds after ``settle_delay``.

    A failing tick is logged and skipped; the loop only ends when its task
    is cancelled or the process exits.
    """

    def __init__(
        self,
        aggregator: Aggregator,
        store: HealthStore,
        broadcaster: Broadcaster,
        settle_delay: float = 3.0,
        interval: float = 5.0,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self._aggregator = aggregator
        self._store = store
        self._broadcaster = broadcaster
        self._settle_delay = settle_delay
        self._interval = interval
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None

    async def tick(self) -> AggregateHealth:
        snapshot = await self._aggregator.run()
        previous = self._store.write(snapshot)
        changed = has_changed(previous, snapshot)
        if previous.overall != snapshot.overall:
            logger.info("Overall health %s -> %s", previous.overall.value, snapshot.overall.value)
        elif changed:
            down = [s.name for s in snapshot.services if not s.healthy]
            logger.info("Service health changed (unhealthy: %s)", ", ".join(down) or "none")
        await self._broadcaster.publish(snapshot, changed=changed)
        return snapshot

    async def run_forever(self) -> None:
        await self._sleep(self._settle_delay)
        while True:
            try:
                await self.tick()
            except Exception:
                logger.exception("Health poll tick failed")
            await self._sleep(self._interval)

    def start(self) -> asyncio.Task[None]:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run_forever(), name="health-poll")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
