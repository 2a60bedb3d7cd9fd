"""HTTP side of the notification feed: initial fetch plus live frame intake."""
import json
import logging
from typing import Optional

import httpx

from followfeed.client.feed import MenuItem, NotificationFeed

logger = logging.getLogger(__name__)

NOTIFICATIONS_PATH = "/api/notifications"
# Largest page GET /api/notifications accepts
MAX_FETCH_LIMIT = 100


class FeedClient:
    """
    Fills a NotificationFeed from the API.

    ``client`` may be any ``httpx.Client`` (including FastAPI's TestClient);
    when omitted one is created for ``base_url``. Failed requests raise
    ``httpx.HTTPStatusError`` and are not retried.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "http://localhost:8000",
        feed: Optional[NotificationFeed] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.feed = feed if feed is not None else NotificationFeed()
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(base_url=base_url, timeout=timeout)
        self._headers = {"Authorization": f"Bearer {token}"}

    def fetch(self) -> NotificationFeed:
        response = self._client.get(
            NOTIFICATIONS_PATH,
            params={"limit": min(self.feed.limit, MAX_FETCH_LIMIT)},
            headers=self._headers,
        )
        response.raise_for_status()
        self.feed.load(response.json())
        return self.feed

    def handle_frame(self, frame: str) -> bool:
        """Feed one websocket frame; returns True if it carried a notification."""
        try:
            message = json.loads(frame)
        except ValueError:
            logger.warning("Ignoring non-JSON frame: %r", frame[:100])
            return False
        if not isinstance(message, dict):
            return False
        if message.get("type") != "notification" or "notification" not in message:
            return False
        self.feed.push(message["notification"])
        return True

    def open(self, item: MenuItem) -> httpx.Response:
        """Follow a menu link; the server marks the notification read."""
        response = self._client.get(item.link, headers=self._headers)
        response.raise_for_status()
        return response

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
