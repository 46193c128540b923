"""
Unit tests for notification channels.
"""

import json

import httpx
import pytest

from src.infrastructure.notifications.channels import (
    LoggingNotificationChannel,
    PushGatewayNotificationChannel,
)

DATA = {"type": "job_assigned", "job_id": "j-1", "job_number": "JOB-1"}


class TestLoggingNotificationChannel:
    """Test cases for LoggingNotificationChannel."""

    @pytest.mark.asyncio
    async def test_always_delivers(self):
        channel = LoggingNotificationChannel()
        assert await channel.send("e-1", "New Job Assignment", "body", DATA) is True


class TestPushGatewayNotificationChannel:
    """Test cases for PushGatewayNotificationChannel."""

    @pytest.mark.asyncio
    async def test_posts_message_with_token(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["auth"] = request.headers.get("Authorization")
            captured["body"] = json.loads(request.content)
            return httpx.Response(202)

        channel = PushGatewayNotificationChannel(
            url="https://push.example.test/send",
            token="secret",
            transport=httpx.MockTransport(handler),
        )

        delivered = await channel.send("e-1", "New Job Assignment", "body", DATA)

        assert delivered is True
        assert captured["auth"] == "Bearer secret"
        assert captured["body"] == {
            "recipient": {"engineer_id": "e-1"},
            "notification": {"title": "New Job Assignment", "body": "body"},
            "data": DATA,
        }

    @pytest.mark.asyncio
    async def test_rejection_is_not_delivered(self):
        channel = PushGatewayNotificationChannel(
            url="https://push.example.test/send",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )

        assert await channel.send("e-1", "t", "b", DATA) is False

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        channel = PushGatewayNotificationChannel(
            url="https://push.example.test/send",
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(httpx.ConnectError):
            await channel.send("e-1", "t", "b", DATA)

    @pytest.mark.asyncio
    async def test_unconfigured_channel_is_not_delivered(self):
        channel = PushGatewayNotificationChannel(url="")
        assert await channel.send("e-1", "t", "b", DATA) is False
