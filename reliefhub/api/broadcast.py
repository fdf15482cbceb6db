"""
WebSocket fan-out for ReliefHub.

Delivery is best effort: a subscriber whose send fails is dropped.
"""

from typing import Any, Dict, Set
from fastapi import WebSocket
from reliefhub.core.models import Broadcast
from reliefhub.observability.logging_setup import get_logger

log = get_logger("reliefhub.ws")

SOCIAL_MEDIA_UPDATED = "social_media_updated"


class Broadcaster:
    """WebSocket connection manager"""

    def __init__(self):
        self.active: Set[WebSocket] = set()

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self.active.add(ws)
        log.debug(f"Subscriber connected, total={len(self.active)}")

    def disconnect(self, ws: WebSocket) -> None:
        self.active.discard(ws)
        log.debug(f"Subscriber disconnected, total={len(self.active)}")

    async def send(self, payload: Dict[str, Any]) -> int:
        """Sends a payload to every subscriber; returns how many received it."""
        dead: Set[WebSocket] = set()
        for ws in list(self.active):
            try:
                await ws.send_json(payload)
            except Exception as e:
                log.warning(f"Dropping subscriber after failed send: {e}")
                dead.add(ws)
        self.active -= dead
        return len(self.active)

    async def social_media_updated(self, broadcast: Broadcast) -> int:
        return await self.send({"event": SOCIAL_MEDIA_UPDATED, **broadcast.model_dump(mode="json")})
