"""
Integration tests for the realtime WebSocket stream.
"""

import asyncio
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect, WebSocketState

from src.api.app import create_app
from src.api.routes.realtime import agency_stream
from src.domain.events.job_changed import agency_channel
from tests.factories import AGENCY_ID, OTHER_AGENCY_ID, actor_headers

STREAM = f"/api/v1/realtime/agencies/{AGENCY_ID}"


class UnwritableWebSocket:
    """Accepted socket whose outbound sends fail and which never sends frames."""

    def __init__(self, app):
        self.app = app
        self.headers = actor_headers()
        self.client_state = WebSocketState.CONNECTED
        self.close_code = None

    async def accept(self):
        pass

    async def send_json(self, payload):
        raise RuntimeError("connection reset")

    async def receive_text(self):
        await asyncio.Event().wait()

    async def close(self, code=1000, reason=None):
        self.close_code = code
        self.client_state = WebSocketState.DISCONNECTED


@pytest.fixture
def realtime_app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def ws_client(realtime_app):
    return TestClient(realtime_app)


class TestAgencyStream:
    """Test cases for the agency WebSocket."""

    def test_requires_session(self, ws_client):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with ws_client.websocket_connect(STREAM):
                pass

        assert exc_info.value.code == 1008

    def test_rejects_other_agency(self, ws_client):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with ws_client.websocket_connect(
                f"/api/v1/realtime/agencies/{OTHER_AGENCY_ID}", headers=actor_headers()
            ):
                pass

        assert exc_info.value.code == 1008

    def test_rejects_malformed_agency_id(self, ws_client):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with ws_client.websocket_connect(
                "/api/v1/realtime/agencies/not-a-uuid", headers=actor_headers()
            ):
                pass

        assert exc_info.value.code == 1008

    def test_receives_agency_events(self, ws_client, realtime_app):
        hub = realtime_app.state.realtime_hub
        payload = {"event": "job_assigned", "job_id": str(uuid4())}

        with ws_client.websocket_connect(STREAM, headers=actor_headers()) as websocket:
            assert hub.subscriber_count(agency_channel(AGENCY_ID)) == 1

            websocket.portal.call(hub.publish, agency_channel(AGENCY_ID), payload)

            assert websocket.receive_json() == payload

    def test_disconnect_releases_subscription(self, ws_client, realtime_app):
        hub = realtime_app.state.realtime_hub

        with ws_client.websocket_connect(STREAM, headers=actor_headers()):
            assert hub.subscriber_count(agency_channel(AGENCY_ID)) == 1

        assert hub.subscriber_count(agency_channel(AGENCY_ID)) == 0

    @pytest.mark.asyncio
    async def test_failed_send_ends_stream(self, realtime_app):
        hub = realtime_app.state.realtime_hub
        channel = agency_channel(AGENCY_ID)
        websocket = UnwritableWebSocket(realtime_app)

        stream = asyncio.create_task(agency_stream(websocket, str(AGENCY_ID)))
        while hub.subscriber_count(channel) == 0 and not stream.done():
            await asyncio.sleep(0)
        await hub.publish(channel, {"event": "job_assigned"})

        await asyncio.wait_for(stream, timeout=1)

        assert websocket.close_code == 1011
        assert hub.subscriber_count(channel) == 0

    def test_unavailable_with_redis_backend(self, test_settings):
        redis_settings = test_settings.model_copy(update={"REALTIME_BACKEND": "redis"})
        client = TestClient(create_app(redis_settings))

        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect(STREAM, headers=actor_headers()):
                pass

        assert exc_info.value.code == 1011
