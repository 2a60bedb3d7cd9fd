"""
Notification kinds and their wire shapes.

Each kind is a pydantic model tagged by ``type``; together they form a closed
discriminated union. The tag is stored in ``notifications.type`` and the
remaining fields in ``notifications.data``.
"""
from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

FOLLOW = "follow"
NEW_POST = "new-post"


class FollowNotification(BaseModel):
    type: Literal["follow"] = FOLLOW
    follower_id: int
    follower_name: str


class NewPostNotification(BaseModel):
    type: Literal["new-post"] = NEW_POST
    following_id: int
    following_name: str
    post_id: int


NotificationKind = Annotated[
    Union[FollowNotification, NewPostNotification],
    Field(discriminator="type"),
]


class UnknownNotification(BaseModel):
    """A record whose tag or payload is not one of the known kinds."""
    type: str
    data: Dict[str, Any] = {}


_kind_adapter = TypeAdapter(NotificationKind)


def parse_kind(type_: str, data: Optional[Dict[str, Any]]) -> Union[FollowNotification, NewPostNotification, UnknownNotification]:
    payload = dict(data or {})
    try:
        return _kind_adapter.validate_python({**payload, "type": type_})
    except ValidationError:
        return UnknownNotification(type=type_, data=payload)


def kind_payload(kind: Union[FollowNotification, NewPostNotification]) -> Dict[str, Any]:
    """The ``data`` column for a kind: every field but the tag."""
    return kind.model_dump(exclude={"type"})


class NotificationResponse(BaseModel):
    id: UUID
    type: str
    data: Dict[str, Any]
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MenuItemResponse(BaseModel):
    link: str
    text: str


def to_wire(record) -> Dict[str, Any]:
    """The JSON shape pushed to clients: ``{id, type, data, read_at}``."""
    return {
        "id": str(record.id),
        "type": record.type,
        "data": dict(record.data or {}),
        "read_at": record.read_at.isoformat() if record.read_at else None,
    }
