"""Utility modules for the application."""
from followfeed.utils.logger import (
    setup_logging,
    safe_print,
)

__all__ = [
    'setup_logging',
    'safe_print',
]
