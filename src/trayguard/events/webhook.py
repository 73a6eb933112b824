"""Fire-and-forget webhook delivery listener."""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from typing import TYPE_CHECKING

import httpx

from trayguard.events.emitter import HealthEvent

if TYPE_CHECKING:
    from trayguard.config.models import WebhookConfig

logger = logging.getLogger(__name__)


class WebhookListener:
    """Delivers matching health events to configured URLs. Implements EventListener protocol."""

    def __init__(self, webhooks: list[WebhookConfig], timeout: float = 10.0) -> None:
        self._webhooks = webhooks
        self._timeout = timeout

    async def on_event(self, event: HealthEvent) -> None:
        for wh in self._webhooks:
            if event.event_type in wh.events or "*" in wh.events:
                await self._deliver(wh, event)

    async def _deliver(self, wh: WebhookConfig, event: HealthEvent) -> None:
        """All exceptions caught and logged."""
        try:
            payload = {
                "event_type": event.event_type,
                "timestamp": event.timestamp.isoformat(),
                "data": event.data,
            }
            # Serialize once: sign and send the exact same bytes
            body_bytes = json.dumps(payload).encode()
            headers: dict[str, str] = {"Content-Type": "application/json"}
            if wh.secret:
                sig = hmac.new(
                    wh.secret.encode(), body_bytes, hashlib.sha256
                ).hexdigest()
                headers["X-TrayGuard-Signature"] = sig
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                await client.post(wh.url, content=body_bytes, headers=headers)
        except Exception:
            logger.exception(
                "Webhook delivery failed for %s (event: %s)",
                wh.url,
                event.event_type,
            )
