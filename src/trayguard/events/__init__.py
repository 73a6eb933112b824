"""Health event broadcasting for TrayGuard."""

from __future__ import annotations

from trayguard.events.broadcaster import Broadcaster
from trayguard.events.emitter import (
    HEALTH_CHANGED,
    HEALTH_UPDATE,
    EventEmitter,
    EventListener,
    HealthEvent,
)
from trayguard.events.log import EventLog, StatusTransition
from trayguard.events.webhook import WebhookListener
from trayguard.events.windows import WindowBroadcastListener

__all__ = [
    "HEALTH_CHANGED",
    "HEALTH_UPDATE",
    "Broadcaster",
    "EventEmitter",
    "EventListener",
    "EventLog",
    "HealthEvent",
    "StatusTransition",
    "WebhookListener",
    "WindowBroadcastListener",
]
