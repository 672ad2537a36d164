"""
WebSocket Connection Manager for real-time room updates.
"""
import logging
from typing import Dict, Iterable

from fastapi import WebSocket
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class WebSocketManager:
    """Maps connection ids to live sockets and delivers outbound messages."""

    def __init__(self):
        self.active_connections: Dict[str, WebSocket] = {}

    async def connect(self, connection_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections[connection_id] = websocket

    def disconnect(self, connection_id: str) -> None:
        self.active_connections.pop(connection_id, None)

    async def send(self, connection_id: str, event: str, payload: BaseModel) -> None:
        """Send one event to one connection. Unknown or closed connections are skipped."""
        websocket = self.active_connections.get(connection_id)
        if websocket is None:
            return
        message = {"event": event, "data": payload.model_dump(by_alias=True, exclude_none=True)}
        try:
            await websocket.send_json(message)
        except Exception as e:
            # Best effort: a dead peer must not stop delivery to the rest
            logger.warning("Failed to send %s to %s: %s", event, connection_id, e)

    async def dispatch(self, outbound: Iterable) -> None:
        """Deliver Outbound records in order."""
        for item in outbound:
            for connection_id in item.recipients:
                await self.send(connection_id, item.event, item.payload)


# Global manager instance
ws_manager = WebSocketManager()
