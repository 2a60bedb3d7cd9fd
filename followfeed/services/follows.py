import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from followfeed.core.errors import (
    FollowError,
    NotFoundError,
    MSG_ALREADY_FOLLOWING,
    MSG_CANNOT_FOLLOW_SELF,
    MSG_NOT_FOLLOWING,
    MSG_USER_NOT_FOUND,
)
from followfeed.models.follow import Follow
from followfeed.models.user import User
from followfeed.schemas.notification import FollowNotification
from followfeed.services.notifications import notify

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(MSG_USER_NOT_FOUND)
    return user


def is_following(db: Session, follower_id: int, followed_id: int) -> bool:
    return db.query(Follow).filter(
        Follow.follower_id == follower_id,
        Follow.followed_id == followed_id,
    ).first() is not None


def following_of(db: Session, user: User) -> List[User]:
    """Users that `user` follows."""
    return db.query(User).join(Follow, Follow.followed_id == User.id).filter(
        Follow.follower_id == user.id
    ).order_by(User.id).all()


def followers_of(db: Session, user: User) -> List[User]:
    """Users following `user`."""
    return db.query(User).join(Follow, Follow.follower_id == User.id).filter(
        Follow.followed_id == user.id
    ).order_by(User.id).all()


async def follow(db: Session, follower: User, target: User) -> str:
    if follower.id == target.id:
        raise FollowError(MSG_CANNOT_FOLLOW_SELF)
    if is_following(db, follower.id, target.id):
        raise FollowError(MSG_ALREADY_FOLLOWING.format(name=target.name))

    db.add(Follow(follower_id=follower.id, followed_id=target.id))
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent follow of the same pair
        db.rollback()
        raise FollowError(MSG_ALREADY_FOLLOWING.format(name=target.name))

    logger.info("User %s followed user %s", follower.id, target.id)
    await notify(db, target, FollowNotification(follower_id=follower.id, follower_name=follower.name))
    return f"You are now following {target.name}"


def unfollow(db: Session, follower: User, target: User) -> str:
    deleted = db.query(Follow).filter(
        Follow.follower_id == follower.id,
        Follow.followed_id == target.id,
    ).delete(synchronize_session=False)
    if not deleted:
        raise FollowError(MSG_NOT_FOLLOWING.format(name=target.name))
    db.commit()
    logger.info("User %s unfollowed user %s", follower.id, target.id)
    return f"You are no longer following {target.name}"
