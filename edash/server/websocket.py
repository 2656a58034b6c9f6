"""
WebSocket connection manager for the heatmap overlay.

Keeps the set of connected display clients and pushes overlay updates
to every one of them.
"""

import asyncio
import logging

from fastapi import WebSocket

from edash.models.entities import OverlayState
from edash.server.models.heatmap import OverlayMessage

logger = logging.getLogger(__name__)


def overlay_message(state: OverlayState) -> OverlayMessage:
    """Wire message for an overlay update."""
    return OverlayMessage(**state.as_dict())


class ConnectionManager:
    """Overlay display clients connected over /ws/overlay."""

    def __init__(self):
        self.active_connections: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket):
        """Accept a display client and register it."""
        await websocket.accept()
        async with self._lock:
            self.active_connections.add(websocket)

    async def disconnect(self, websocket: WebSocket):
        async with self._lock:
            self.active_connections.discard(websocket)

    async def broadcast(self, message: OverlayMessage):
        """Push one overlay message to every client, dropping any that fail."""
        if not self.active_connections:
            return

        payload = message.model_dump_json()
        async with self._lock:
            stale = [ws for ws in self.active_connections
                     if not await self._send(ws, payload)]
            self.active_connections.difference_update(stale)

        if stale:
            logger.debug("Dropped %d overlay clients after failed sends", len(stale))

    @staticmethod
    async def _send(websocket: WebSocket, payload: str) -> bool:
        try:
            await websocket.send_text(payload)
        except Exception:
            logger.debug("Overlay send failed", exc_info=True)
            return False
        return True

    async def publish_overlay(self, state: OverlayState):
        """Broadcast an overlay state to all clients."""
        await self.broadcast(overlay_message(state))

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)
