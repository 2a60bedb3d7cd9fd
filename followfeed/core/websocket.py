import logging
from typing import Dict, Set
from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


def channel_for(user_id) -> str:
    """Private channel a user's notifications are broadcast on."""
    return f"users.{user_id}"


class ConnectionManager:
    def __init__(self):
        # Store active subscriptions: {channel: set of websockets}
        self.active_connections: Dict[str, Set[WebSocket]] = {}
    
    async def connect(self, websocket: WebSocket, channel: str):
        """Accept a websocket and subscribe it to a channel"""
        await websocket.accept()
        self.subscribe(websocket, channel)
        logger.info("Websocket subscribed to %s", channel)

    def subscribe(self, websocket: WebSocket, channel: str):
        if channel not in self.active_connections:
            self.active_connections[channel] = set()
        self.active_connections[channel].add(websocket)
    
    def disconnect(self, websocket: WebSocket, channel: str):
        """Drop a websocket from a channel"""
        if channel in self.active_connections:
            self.active_connections[channel].discard(websocket)
            if not self.active_connections[channel]:
                del self.active_connections[channel]
        logger.info("Websocket left %s", channel)

    def subscriber_count(self, channel: str) -> int:
        return len(self.active_connections.get(channel, ()))
    
    async def send_to_channel(self, message: str, channel: str) -> int:
        """Send a message to every socket on a channel; returns how many received it"""
        sockets = self.active_connections.get(channel)
        if not sockets:
            return 0
        delivered = 0
        disconnected = set()
        for websocket in list(sockets):
            try:
                await websocket.send_text(message)
                delivered += 1
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.debug("Dropping dead websocket on %s: %s", channel, e)
                disconnected.add(websocket)
        
        # Remove disconnected websockets
        if disconnected:
            sockets -= disconnected
            if not sockets:
                self.active_connections.pop(channel, None)
        return delivered

# Global connection manager instance
manager = ConnectionManager()
