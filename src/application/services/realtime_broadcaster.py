"""
Realtime broadcast of job change events.
"""

import asyncio
from typing import Set

from src.application.interfaces.services import RealtimePublisherInterface
from src.config.logging import get_logger
from src.domain.events.job_changed import JobChanged
from src.infrastructure.monitoring.metrics import REALTIME_EVENTS

logger = get_logger(__name__)


class RealtimeBroadcaster:
    """Publishes job change events to the owning agency's channel.

    ``broadcast`` schedules the publish and returns immediately; the
    resulting task is tracked so it is not garbage collected mid-flight and
    can be drained on shutdown. Publish failures are logged, never raised.
    """

    def __init__(self, publisher: RealtimePublisherInterface):
        self.publisher = publisher
        self.logger = logger
        self._pending: Set[asyncio.Task] = set()

    def broadcast(self, event: JobChanged) -> asyncio.Task:
        """Fire-and-forget publish of an event."""
        task = asyncio.create_task(self.publish(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def publish(self, event: JobChanged) -> int:
        """Publish an event now; returns the number of receivers (0 on failure)."""
        event_type = event.event_type.value
        try:
            receivers = await self.publisher.publish(event.channel, event.to_payload())
        except Exception as e:
            REALTIME_EVENTS.labels(event_type=event_type, result="error").inc()
            self.logger.error(
                "Realtime broadcast failed",
                channel=event.channel,
                event_type=event_type,
                job_id=str(event.job_id),
                error=str(e),
            )
            return 0

        REALTIME_EVENTS.labels(event_type=event_type, result="published").inc()
        self.logger.debug(
            "Realtime event published",
            channel=event.channel,
            event_type=event_type,
            job_id=str(event.job_id),
            receivers=receivers,
        )
        return receivers

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for in-flight broadcasts to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
