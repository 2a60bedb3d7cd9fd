from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from followfeed.db.session import get_db
from followfeed.models.user import User
from followfeed.models.follow import Follow
from followfeed.schemas.user import UserSummary, UserProfileResponse, FollowResult
from followfeed.core.auth import get_current_user
from followfeed.services import follows

router = APIRouter()


def _summaries(db: Session, users: List[User], current_user: User) -> List[UserSummary]:
    followed_ids = {
        row.followed_id
        for row in db.query(Follow.followed_id).filter(Follow.follower_id == current_user.id).all()
    }
    return [UserSummary(id=u.id, name=u.name, is_following=u.id in followed_ids) for u in users]


@router.get("", response_model=List[UserSummary])
async def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List everyone except the current user, flagged with whether they are followed
    """
    users = db.query(User).filter(User.id != current_user.id).order_by(User.id).all()
    return _summaries(db, users, current_user)

@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user_profile(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    user = follows.get_user(db, user_id)
    return UserProfileResponse(
        id=user.id,
        name=user.name,
        followers_count=db.query(Follow).filter(Follow.followed_id == user.id).count(),
        following_count=db.query(Follow).filter(Follow.follower_id == user.id).count(),
        is_following=follows.is_following(db, current_user.id, user.id),
    )

@router.get("/{user_id}/followers", response_model=List[UserSummary])
async def list_followers(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    user = follows.get_user(db, user_id)
    return _summaries(db, follows.followers_of(db, user), current_user)

@router.get("/{user_id}/following", response_model=List[UserSummary])
async def list_following(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    user = follows.get_user(db, user_id)
    return _summaries(db, follows.following_of(db, user), current_user)

@router.post("/{user_id}/follow", response_model=FollowResult)
async def follow_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Follow a user; the followed user gets a follow notification
    """
    target = follows.get_user(db, user_id)
    message = await follows.follow(db, current_user, target)
    return FollowResult(message=message)

@router.delete("/{user_id}/follow", response_model=FollowResult)
async def unfollow_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    target = follows.get_user(db, user_id)
    return FollowResult(message=follows.unfollow(db, current_user, target))
