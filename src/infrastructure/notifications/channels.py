"""
Notification channels for assignment messages.
"""

from typing import Any, Dict, Optional

import httpx

from src.application.interfaces.services import NotificationChannelInterface
from src.config.logging import get_logger
from src.infrastructure.external.http_client import HTTPClient

logger = get_logger(__name__)


class LoggingNotificationChannel(NotificationChannelInterface):
    """Writes the message to the structured log; used when no push backend exists."""

    name = "log"

    async def send(
        self, engineer_id: str, title: str, body: str, data: Dict[str, Any]
    ) -> bool:
        logger.info(
            "Notification",
            engineer_id=engineer_id,
            title=title,
            body=body,
            data=data,
        )
        return True


class PushGatewayNotificationChannel(NotificationChannelInterface):
    """Posts the message to an HTTP push gateway."""

    name = "push_gateway"

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout: float = 3.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def is_configured(self) -> bool:
        return bool(self.url)

    async def send(
        self, engineer_id: str, title: str, body: str, data: Dict[str, Any]
    ) -> bool:
        if not self.is_configured():
            logger.warning("Push gateway channel not configured")
            return False

        headers = {"Authorization": f"Bearer {self.token}"} if self.token else None
        payload = {
            "recipient": {"engineer_id": engineer_id},
            "notification": {"title": title, "body": body},
            "data": data,
        }

        async with HTTPClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.url, data=payload, headers=headers)

        if response.is_success:
            return True

        logger.warning(
            "Push gateway rejected notification",
            engineer_id=engineer_id,
            status_code=response.status_code,
        )
        return False
