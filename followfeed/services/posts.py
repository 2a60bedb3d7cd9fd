import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from followfeed.core import events
from followfeed.core.errors import NotFoundError, MSG_POST_NOT_FOUND
from followfeed.models.post import Post
from followfeed.models.user import User
from followfeed.schemas.notification import NewPostNotification
from followfeed.services.follows import followers_of
from followfeed.services.notifications import notify

logger = logging.getLogger(__name__)


@dataclass
class PostCreated:
    db: Session
    post: Post
    author: User


async def create_post(db: Session, author: User, title: str, body: str) -> Post:
    post = Post(user_id=author.id, title=title, body=body)
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s published post %s", author.id, post.id)
    await events.dispatch(PostCreated(db=db, post=post, author=author))
    return post


def get_post(db: Session, post_id: int) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise NotFoundError(MSG_POST_NOT_FOUND)
    return post


@events.listen(PostCreated)
async def notify_followers_of_new_post(event: PostCreated) -> None:
    kind = NewPostNotification(
        following_id=event.author.id,
        following_name=event.author.name,
        post_id=event.post.id,
    )
    for follower in followers_of(event.db, event.author):
        await notify(event.db, follower, kind)
