"""
Assignment notification dispatch.
"""

import asyncio
from uuid import UUID

from src.application.interfaces.services import NotificationChannelInterface
from src.config.logging import get_logger
from src.infrastructure.monitoring.metrics import NOTIFICATIONS_TOTAL

logger = get_logger(__name__)


class NotificationDispatcher:
    """Sends the 'new job' message to an engineer.

    ``notify`` never raises: timeouts and channel failures are logged and
    reported as ``False`` so a delivered assignment is never undone by a
    notification problem.
    """

    def __init__(self, channel: NotificationChannelInterface, timeout_seconds: float = 3.0):
        self.channel = channel
        self.timeout_seconds = timeout_seconds
        self.logger = logger

    async def notify(
        self, engineer_id: UUID, job_id: UUID, job_number: str, client_name: str
    ) -> bool:
        """Notify an engineer of a new assignment; returns delivery success."""
        title = "New Job Assignment"
        body = f"You have been assigned to job {job_number} for {client_name}"
        data = {
            "type": "job_assigned",
            "job_id": str(job_id),
            "job_number": job_number,
        }

        try:
            delivered = bool(
                await asyncio.wait_for(
                    self.channel.send(str(engineer_id), title, body, data),
                    timeout=self.timeout_seconds,
                )
            )
        except asyncio.TimeoutError:
            self.logger.warning(
                "Notification timed out",
                channel=self.channel.name,
                engineer_id=str(engineer_id),
                job_id=str(job_id),
                timeout_seconds=self.timeout_seconds,
            )
            delivered = False
        except Exception as e:
            self.logger.error(
                "Notification failed",
                channel=self.channel.name,
                engineer_id=str(engineer_id),
                job_id=str(job_id),
                error=str(e),
            )
            delivered = False

        NOTIFICATIONS_TOTAL.labels(
            channel=self.channel.name, delivered=str(delivered).lower()
        ).inc()

        if delivered:
            self.logger.info(
                "Notification sent",
                channel=self.channel.name,
                engineer_id=str(engineer_id),
                job_id=str(job_id),
            )
        return delivered
