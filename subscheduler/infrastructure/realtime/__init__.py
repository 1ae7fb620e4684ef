"""
Realtime job change feeds.
"""

from .change_feed import (
    InMemoryJobChangeFeed,
    RedisJobChangeFeed,
    create_change_feed,
)

__all__ = [
    "InMemoryJobChangeFeed",
    "RedisJobChangeFeed",
    "create_change_feed",
]
