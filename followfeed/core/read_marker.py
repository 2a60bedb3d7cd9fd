from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from followfeed.core.auth import get_current_user
from followfeed.db.session import get_db
from followfeed.models.user import User
from followfeed.services.notifications import mark_as_read


async def mark_notification_as_read(
    read: Optional[str] = Query(None, description="Id of a notification to mark as read"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    """Router dependency: a request carrying ?read=<id> marks that notification read."""
    if read:
        mark_as_read(db, current_user, read)
