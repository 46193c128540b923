"""
Unit tests for RealtimeBroadcaster.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.interfaces.services import RealtimePublisherInterface
from src.application.services.realtime_broadcaster import RealtimeBroadcaster
from src.domain.events.job_changed import JobChanged, JobChangeType
from src.infrastructure.realtime.memory_hub import InMemoryRealtimeHub
from tests.factories import AGENCY_ID


@pytest.fixture
def event():
    return JobChanged(
        event_type=JobChangeType.JOB_ASSIGNED,
        job_id=uuid4(),
        agency_id=AGENCY_ID,
        job_number="JOB-1",
        status="assigned",
        changed_by=uuid4(),
        engineer_id=uuid4(),
    )


class TestRealtimeBroadcaster:
    """Test cases for RealtimeBroadcaster."""

    @pytest.mark.asyncio
    async def test_publish_to_agency_channel(self, event):
        publisher = AsyncMock(spec=RealtimePublisherInterface)
        publisher.publish = AsyncMock(return_value=2)
        broadcaster = RealtimeBroadcaster(publisher)

        receivers = await broadcaster.publish(event)

        assert receivers == 2
        publisher.publish.assert_awaited_once_with(
            f"agency:{AGENCY_ID}", event.to_payload()
        )

    @pytest.mark.asyncio
    async def test_publish_failure_is_not_raised(self, event):
        publisher = AsyncMock(spec=RealtimePublisherInterface)
        publisher.publish = AsyncMock(side_effect=ConnectionError("redis down"))
        broadcaster = RealtimeBroadcaster(publisher)

        assert await broadcaster.publish(event) == 0

    @pytest.mark.asyncio
    async def test_broadcast_is_fire_and_forget(self, event):
        hub = InMemoryRealtimeHub()
        broadcaster = RealtimeBroadcaster(hub)

        with hub.subscribe(event.channel) as subscription:
            task = broadcaster.broadcast(event)
            assert broadcaster.pending_count == 1

            await broadcaster.drain()

            assert task.result() == 1
            assert broadcaster.pending_count == 0
            assert subscription.queue.get_nowait() == event.to_payload()

    @pytest.mark.asyncio
    async def test_other_agencies_do_not_receive(self, event):
        hub = InMemoryRealtimeHub()
        broadcaster = RealtimeBroadcaster(hub)

        with hub.subscribe(f"agency:{uuid4()}") as subscription:
            await broadcaster.publish(event)

            assert subscription.queue.empty()
