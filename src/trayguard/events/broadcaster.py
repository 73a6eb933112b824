"""Publishes each new snapshot to the indicator and to observers."""

from __future__ import annotations

from trayguard.desktop.indicator import IndicatorPresenter
from trayguard.events.emitter import HEALTH_CHANGED, HEALTH_UPDATE, EventEmitter, HealthEvent
from trayguard.health.models import AggregateHealth


class Broadcaster:
    def __init__(self, emitter: EventEmitter, indicator: IndicatorPresenter | None = None) -> None:
        self._emitter = emitter
        self._indicator = indicator

    async def publish(self, snapshot: AggregateHealth, changed: bool = False) -> None:
        """Best effort: indicator failures are logged, event delivery is not awaited."""
        if self._indicator is not None:
            self._indicator.apply(snapshot.overall)
        await self._emitter.emit(HealthEvent.now(HEALTH_UPDATE, snapshot))
        if changed:
            await self._emitter.emit(HealthEvent.now(HEALTH_CHANGED, snapshot))
