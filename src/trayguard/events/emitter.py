"""Event emitter, listener protocol, and health event dataclass."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Protocol

from trayguard.health.models import AggregateHealth

logger = logging.getLogger(__name__)

HEALTH_UPDATE = "health-update"
HEALTH_CHANGED = "health-changed"
EVENT_TYPES = frozenset({HEALTH_UPDATE, HEALTH_CHANGED})


@dataclass(frozen=True)
class HealthEvent:
    """A broadcast carrying a full health snapshot."""

    event_type: str  # "health-update" or "health-changed"
    snapshot: AggregateHealth
    timestamp: datetime

    @classmethod
    def now(cls, event_type: str, snapshot: AggregateHealth) -> HealthEvent:
        return cls(event_type=event_type, snapshot=snapshot, timestamp=datetime.now(UTC))

    @property
    def data(self) -> dict[str, Any]:
        return self.snapshot.to_dict()


class EventListener(Protocol):
    """Protocol for consuming health events."""

    async def on_event(self, event: HealthEvent) -> None: ...


class EventEmitter:
    """Dispatches events to listeners without waiting for them.

    Each delivery runs in its own task, so a slow or failing listener never
    holds up the caller.
    """

    def __init__(self) -> None:
        self._listeners: list[EventListener] = []
        self._pending: set[asyncio.Task[None]] = set()

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def emit(self, event: HealthEvent) -> None:
        for listener in list(self._listeners):
            task = asyncio.create_task(
                self._deliver(listener, event),
                name=f"event-{event.event_type}",
            )
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for in-flight deliveries. Used on shutdown."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _deliver(self, listener: EventListener, event: HealthEvent) -> None:
        try:
            await listener.on_event(event)
        except Exception:
            logger.exception("Event listener error")
