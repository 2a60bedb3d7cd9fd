"""followfeed: follow users, get notified about follows and new posts."""

__version__ = "1.0.0"
