"""Recent health broadcasts and the overall-status transitions they carried."""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from trayguard.events.emitter import HEALTH_UPDATE, HealthEvent
from trayguard.health.models import OverallStatus


@dataclass(frozen=True)
class StatusTransition:
    previous: OverallStatus
    current: OverallStatus
    timestamp: datetime
    unhealthy: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "previous": self.previous.value,
            "current": self.current.value,
            "timestamp": self.timestamp.isoformat(),
            "unhealthy": list(self.unhealthy),
        }


class EventLog:
    """Bounded history of broadcasts. Implements EventListener protocol.

    Every ``health-update`` is compared with the last one seen; a change of
    overall status is kept as a StatusTransition in its own buffer so it
    survives long runs of identical ticks.
    """

    def __init__(self, max_size: int = 100) -> None:
        self._events: deque[HealthEvent] = deque(maxlen=max_size)
        self._transitions: deque[StatusTransition] = deque(maxlen=max_size)
        self._last_overall: OverallStatus | None = None
        self._lock = asyncio.Lock()

    async def on_event(self, event: HealthEvent) -> None:
        async with self._lock:
            self._events.append(event)
            if event.event_type != HEALTH_UPDATE:
                return
            overall = event.snapshot.overall
            if self._last_overall is not None and overall != self._last_overall:
                self._transitions.append(
                    StatusTransition(
                        previous=self._last_overall,
                        current=overall,
                        timestamp=event.timestamp,
                        unhealthy=tuple(s.name for s in event.snapshot.services if not s.healthy),
                    )
                )
            self._last_overall = overall

    async def get_recent(
        self,
        limit: int = 20,
        event_type: str | None = None,
        overall: OverallStatus | None = None,
    ) -> list[HealthEvent]:
        """Most recent first, optionally narrowed by event type and overall status."""
        async with self._lock:
            events = [
                e
                for e in reversed(self._events)
                if (event_type is None or e.event_type == event_type)
                and (overall is None or e.snapshot.overall == overall)
            ]
        return events[:limit]

    async def get_transitions(self, limit: int = 20) -> list[StatusTransition]:
        async with self._lock:
            transitions = list(reversed(self._transitions))
        return transitions[:limit]
