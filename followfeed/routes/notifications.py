from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from followfeed.client.feed import NotificationFeed
from followfeed.core.auth import get_current_user
from followfeed.core.config import settings
from followfeed.db.session import get_db
from followfeed.models.user import User
from followfeed.schemas.notification import NotificationResponse, MenuItemResponse, to_wire
from followfeed.services.notifications import unread_for

router = APIRouter()

@router.get("", response_model=List[NotificationResponse])
async def list_unread_notifications(
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Unread notifications of the current user, newest first
    """
    return unread_for(db, current_user, limit or settings.NOTIFICATION_MENU_LIMIT)

@router.get("/menu", response_model=List[MenuItemResponse])
async def notification_menu(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    The notification menu rendered server side, same links and texts as the client feed
    """
    feed = NotificationFeed(limit=settings.NOTIFICATION_MENU_LIMIT)
    feed.load(to_wire(record) for record in unread_for(db, current_user, feed.limit))
    return [MenuItemResponse(link=item.link, text=item.text) for item in feed.render()]
