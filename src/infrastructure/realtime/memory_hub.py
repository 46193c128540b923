"""
In-process realtime hub backing the WebSocket endpoint.
"""

import asyncio
from collections import defaultdict
from typing import Any, Dict, Set

from src.application.interfaces.services import RealtimePublisherInterface
from src.config.logging import get_logger
from src.infrastructure.monitoring.metrics import REALTIME_EVENTS

logger = get_logger(__name__)


class Subscription:
    """One subscriber's bounded queue on a channel."""

    def __init__(self, hub: "InMemoryRealtimeHub", channel: str, max_size: int):
        self.hub = hub
        self.channel = channel
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=max_size)
        self.dropped = 0

    def offer(self, payload: Dict[str, Any]) -> bool:
        """Enqueue without blocking; slow subscribers lose events."""
        try:
            self.queue.put_nowait(payload)
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True

    async def get(self) -> Dict[str, Any]:
        return await self.queue.get()

    def close(self) -> None:
        self.hub.unsubscribe(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class InMemoryRealtimeHub(RealtimePublisherInterface):
    """Per-channel fan-out to local subscribers."""

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._subscribers: Dict[str, Set[Subscription]] = defaultdict(set)

    def subscribe(self, channel: str) -> Subscription:
        subscription = Subscription(self, channel, self.queue_size)
        self._subscribers[channel].add(subscription)
        logger.debug(
            "Realtime subscriber added",
            channel=channel,
            subscribers=len(self._subscribers[channel]),
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscribers = self._subscribers.get(subscription.channel)
        if not subscribers:
            return
        subscribers.discard(subscription)
        if not subscribers:
            del self._subscribers[subscription.channel]

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers.get(channel, ()))

    async def publish(self, channel: str, payload: Dict[str, Any]) -> int:
        delivered = 0
        for subscription in list(self._subscribers.get(channel, ())):
            if subscription.offer(payload):
                delivered += 1
            else:
                REALTIME_EVENTS.labels(
                    event_type=payload.get("event", "unknown"), result="dropped"
                ).inc()
                logger.warning(
                    "Realtime subscriber queue full, event dropped",
                    channel=channel,
                    dropped=subscription.dropped,
                )
        return delivered
