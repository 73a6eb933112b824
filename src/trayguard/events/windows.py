"""Forwards health events to every open observer window."""

from __future__ import annotations

import logging

from trayguard.desktop.window import WindowBackend
from trayguard.events.emitter import HealthEvent

logger = logging.getLogger(__name__)


class WindowBroadcastListener:
    """Implements EventListener protocol. Windows that cannot receive are skipped."""

    def __init__(self, backend: WindowBackend) -> None:
        self._backend = backend

    async def on_event(self, event: HealthEvent) -> None:
        payload = event.data
        for window in self._backend.windows():
            try:
                window.emit(event.event_type, payload)
            except Exception as exc:
                logger.debug("Window %s did not take %s: %s", window.label, event.event_type, exc)
