from followfeed.models.user import User
from followfeed.models.follow import Follow
from followfeed.models.post import Post
from followfeed.models.notification import Notification
from followfeed.models.scheduler_lease import SchedulerLease

__all__ = [
    "User",
    "Follow",
    "Post",
    "Notification",
    "SchedulerLease",
]
