"""
Domain errors raised by services.
Routes let them propagate; main.py turns them into JSON responses.
"""
MSG_CANNOT_FOLLOW_SELF = "You cannot follow yourself"
MSG_ALREADY_FOLLOWING = "You are already following {name}"
MSG_NOT_FOLLOWING = "You are not following {name}"
MSG_USER_NOT_FOUND = "User not found"
MSG_POST_NOT_FOUND = "Post not found"


class FollowfeedError(Exception):
    """Base class; status_code is the HTTP status the error maps to."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FollowError(FollowfeedError):
    status_code = 400


class NotFoundError(FollowfeedError):
    status_code = 404
