"""Scheduled tasks registered on the default schedule."""
import logging
from typing import Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from followfeed.models.notification import Notification
from followfeed.scheduling.schedule import schedule

logger = logging.getLogger(__name__)


@schedule.task("notifications:unread-summary", "0 * * * *", on_one_server=True)
def unread_summary(db: Session) -> Dict[int, int]:
    """Log how many unread notifications each user has."""
    rows = db.query(Notification.user_id, func.count(Notification.id)).filter(
        Notification.read_at.is_(None)
    ).group_by(Notification.user_id).all()
    counts = {user_id: count for user_id, count in rows}
    logger.info("Unread notifications: %d user(s), %d total", len(counts), sum(counts.values()))
    return counts
