"""
Redis pub/sub realtime publisher for multi-process deployments.
"""

import json
from typing import Any, Dict, Optional

import redis.asyncio as redis

from src.application.interfaces.services import RealtimePublisherInterface
from src.config.logging import get_logger

logger = get_logger(__name__)


class RedisRealtimePublisher(RealtimePublisherInterface):
    """Publishes events on Redis channels named after the tenant channel."""

    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None):
        self.redis_url = redis_url
        self.redis = client or redis.from_url(redis_url, decode_responses=True)

    async def publish(self, channel: str, payload: Dict[str, Any]) -> int:
        receivers = await self.redis.publish(channel, json.dumps(payload))
        logger.debug("Published to Redis channel", channel=channel, receivers=receivers)
        return receivers

    async def close(self) -> None:
        await self.redis.aclose()

    async def ping(self) -> bool:
        return bool(await self.redis.ping())
