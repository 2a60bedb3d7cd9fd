"""
Client-side notification feed.

A ``NotificationFeed`` owns the records a client shows in its notification
menu. Records arrive in the wire shape ``{id, type, data, read_at}``, either
as a batch from ``GET /api/notifications`` or one at a time from the live
channel. The feed keeps at most ``limit`` records, newest first: a live record
is prepended, a batch is appended in server order, and storage is truncated
after every merge, so what is stored is exactly what is shown. Records are not
de-duplicated.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from followfeed.schemas.notification import (
    FollowNotification,
    NewPostNotification,
    parse_kind,
)

DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class MenuItem:
    link: str
    text: str


def read_link(notification_id: Any, path: str = "") -> str:
    return f"{path}?read={notification_id}"


def render_notification(record: Dict[str, Any], base_path: str = "") -> MenuItem:
    """Resolve the destination link and display text of one record."""
    kind = parse_kind(record.get("type", ""), record.get("data"))
    notification_id = record["id"]
    if isinstance(kind, FollowNotification):
        return MenuItem(
            link=read_link(notification_id, f"{base_path}/users"),
            text=f"{kind.follower_name} followed you",
        )
    if isinstance(kind, NewPostNotification):
        return MenuItem(
            link=read_link(notification_id, f"{base_path}/posts/{kind.post_id}"),
            text=f"{kind.following_name} published a post",
        )
    return MenuItem(link=read_link(notification_id), text="")


class NotificationFeed:
    def __init__(self, limit: int = DEFAULT_LIMIT, base_path: str = ""):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.base_path = base_path
        self._records: List[Dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[Dict[str, Any]]:
        return list(self._records)

    def load(self, records: Iterable[Dict[str, Any]]) -> None:
        """Merge a batch fetched from the server."""
        self._records.extend(records)
        self._truncate()

    def push(self, record: Dict[str, Any]) -> None:
        """Merge one record received on the live channel."""
        self._records.insert(0, record)
        self._truncate()

    def visible(self) -> List[Dict[str, Any]]:
        return self._records[: self.limit]

    def render(self) -> List[MenuItem]:
        return [render_notification(record, self.base_path) for record in self.visible()]

    def _truncate(self) -> None:
        del self._records[self.limit:]
