"""
Realtime fan-out backends.
"""

from .memory_hub import InMemoryRealtimeHub, Subscription
from .redis_publisher import RedisRealtimePublisher

__all__ = [
    "InMemoryRealtimeHub",
    "RedisRealtimePublisher",
    "Subscription",
]
