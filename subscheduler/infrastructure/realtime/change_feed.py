"""
Job change feeds.

The in-memory feed fans events out to asyncio queues within one process. The
Redis feed uses pub/sub so that every worker process sees every change.
"""

import asyncio
import json
from typing import Optional, Set

import redis.asyncio as redis

from subscheduler.application.interfaces.services import (
    JobChangeFeedInterface,
    JobChangeSubscription,
)
from subscheduler.config.logging import get_logger
from subscheduler.domain.events.job_changed import JobChanged

logger = get_logger(__name__)


class InMemorySubscription(JobChangeSubscription):
    def __init__(self, feed: "InMemoryJobChangeFeed", max_queue_size: int):
        self._feed = feed
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue_size)

    async def __anext__(self) -> JobChanged:
        if self not in self._feed.subscriptions:
            raise StopAsyncIteration
        event = await self.queue.get()
        if event is None:
            raise StopAsyncIteration
        return event

    async def close(self) -> None:
        self._feed.subscriptions.discard(self)


class InMemoryJobChangeFeed(JobChangeFeedInterface):
    """Single-process feed backed by one asyncio queue per subscriber."""

    def __init__(self, max_queue_size: int = 1000):
        self.max_queue_size = max_queue_size
        self.subscriptions: Set[InMemorySubscription] = set()

    async def publish(self, event: JobChanged) -> None:
        for subscription in list(self.subscriptions):
            try:
                subscription.queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning(
                    "Dropping job change for slow subscriber", job_id=str(event.job_id)
                )

    async def subscribe(self) -> InMemorySubscription:
        subscription = InMemorySubscription(self, self.max_queue_size)
        self.subscriptions.add(subscription)
        return subscription

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        for subscription in list(self.subscriptions):
            self.subscriptions.discard(subscription)
            try:
                subscription.queue.put_nowait(None)
            except asyncio.QueueFull:
                pass


class RedisSubscription(JobChangeSubscription):
    def __init__(self, pubsub, channel: str):
        self.pubsub = pubsub
        self.channel = channel

    async def __anext__(self) -> JobChanged:
        while True:
            message = await self.pubsub.get_message(
                ignore_subscribe_messages=True, timeout=None
            )
            if message is None:
                continue
            try:
                return JobChanged.from_dict(json.loads(message["data"]))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Ignoring malformed job change message", error=str(e))

    async def close(self) -> None:
        await self.pubsub.unsubscribe(self.channel)
        await self.pubsub.aclose()


class RedisJobChangeFeed(JobChangeFeedInterface):
    """Multi-process feed over Redis pub/sub."""

    def __init__(self, redis_url: str, channel: str = "jobs-changes", client=None):
        self.channel = channel
        self.client = client or redis.from_url(redis_url, decode_responses=True)

    async def publish(self, event: JobChanged) -> None:
        receivers = await self.client.publish(self.channel, json.dumps(event.to_dict()))
        logger.debug(
            "Published job change", job_id=str(event.job_id), receivers=receivers
        )

    async def subscribe(self) -> RedisSubscription:
        pubsub = self.client.pubsub()
        await pubsub.subscribe(self.channel)
        return RedisSubscription(pubsub, self.channel)

    async def ping(self) -> bool:
        return bool(await self.client.ping())

    async def close(self) -> None:
        await self.client.aclose()


def create_change_feed(
    backend: str, redis_url: Optional[str] = None, channel: str = "jobs-changes"
) -> JobChangeFeedInterface:
    """Build the feed selected by configuration."""
    if backend == "redis":
        return RedisJobChangeFeed(redis_url, channel=channel)
    return InMemoryJobChangeFeed()
