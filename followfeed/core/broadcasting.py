"""
Live delivery of notifications to subscribed clients.

The driver is picked by ``BROADCAST_DRIVER``: ``websocket`` pushes through the
in-process connection manager, ``log`` only logs, ``null`` drops everything.
"""
import json
import logging
from typing import Any, Dict, Optional

from followfeed.core.config import settings
from followfeed.core.websocket import ConnectionManager, manager

logger = logging.getLogger(__name__)


class Broadcaster:
    async def broadcast(self, channel: str, event: str, payload: Dict[str, Any]) -> None:
        raise NotImplementedError


class WebSocketBroadcaster(Broadcaster):
    def __init__(self, connections: ConnectionManager):
        self.connections = connections

    async def broadcast(self, channel, event, payload):
        message = json.dumps({"type": event, "channel": channel, event: payload}, ensure_ascii=False)
        delivered = await self.connections.send_to_channel(message, channel)
        logger.debug("Broadcast %s on %s to %d socket(s)", event, channel, delivered)


class LogBroadcaster(Broadcaster):
    async def broadcast(self, channel, event, payload):
        logger.info("Broadcast %s on %s: %s", event, channel, payload)


class NullBroadcaster(Broadcaster):
    async def broadcast(self, channel, event, payload):
        return None


_broadcaster: Optional[Broadcaster] = None


def make_broadcaster(driver: str) -> Broadcaster:
    driver = driver.lower()
    if driver == "websocket":
        return WebSocketBroadcaster(manager)
    if driver == "log":
        return LogBroadcaster()
    if driver == "null":
        return NullBroadcaster()
    raise ValueError(f"Unknown broadcast driver: {driver}")


def get_broadcaster() -> Broadcaster:
    global _broadcaster
    if _broadcaster is None:
        _broadcaster = make_broadcaster(settings.BROADCAST_DRIVER)
    return _broadcaster


def set_broadcaster(broadcaster: Optional[Broadcaster]) -> None:
    """Swap the active driver; None re-reads the setting on next use."""
    global _broadcaster
    _broadcaster = broadcaster
