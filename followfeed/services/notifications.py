"""
Notification delivery: store the record (database channel), then push it on
the recipient's private channel (broadcast channel).
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from followfeed.core.broadcasting import get_broadcaster
from followfeed.core.websocket import channel_for
from followfeed.models.notification import Notification
from followfeed.models.user import User
from followfeed.schemas.notification import (
    FollowNotification,
    NewPostNotification,
    kind_payload,
    to_wire,
)

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


async def notify(
    db: Session,
    recipient: User,
    kind: Union[FollowNotification, NewPostNotification],
) -> Notification:
    record = Notification(user_id=recipient.id, type=kind.type, data=kind_payload(kind))
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Stored %s notification %s for user %s", record.type, record.id, recipient.id)

    # The stored record stands even when live delivery fails
    try:
        await get_broadcaster().broadcast(channel_for(recipient.id), NOTIFICATION_EVENT, to_wire(record))
    except Exception as e:
        logger.warning("Failed to broadcast notification %s: %s", record.id, e)
    return record


def unread_for(db: Session, user: User, limit: Optional[int] = None) -> List[Notification]:
    query = db.query(Notification).filter(
        Notification.user_id == user.id,
        Notification.read_at.is_(None),
    ).order_by(Notification.created_at.desc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def mark_as_read(db: Session, user: User, notification_id: str) -> Optional[Notification]:
    """
    Mark one of the user's notifications read.

    Unknown, malformed or foreign ids are ignored. A record already read keeps
    its original read_at.
    """
    try:
        parsed_id = uuid.UUID(str(notification_id))
    except ValueError:
        logger.debug("Ignoring malformed read id %r", notification_id)
        return None

    record = db.query(Notification).filter(
        Notification.id == parsed_id,
        Notification.user_id == user.id,
    ).first()
    if record is None:
        return None
    if record.read_at is None:
        record.read_at = datetime.utcnow()
        db.commit()
        db.refresh(record)
        logger.info("User %s read notification %s", user.id, record.id)
    return record
