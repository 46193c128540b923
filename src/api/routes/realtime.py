"""
Realtime job change stream over WebSocket.
"""

import asyncio
import contextlib
from uuid import UUID

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from starlette.websockets import WebSocketState

from src.config.logging import get_logger
from src.domain.events.job_changed import agency_channel
from src.infrastructure.realtime.memory_hub import Subscription

logger = get_logger(__name__)
router = APIRouter(prefix="/realtime", tags=["realtime"])


async def _forward(websocket: WebSocket, subscription: Subscription) -> None:
    while True:
        payload = await subscription.get()
        await websocket.send_json(payload)


async def _drain_inbound(websocket: WebSocket) -> None:
    # Inbound frames are ignored; receiving detects disconnects
    while True:
        await websocket.receive_text()


@router.websocket("/agencies/{agency_id}")
async def agency_stream(websocket: WebSocket, agency_id: str):
    """Stream committed job changes for one agency.

    At-most-once, no replay: clients re-fetch state after reconnecting.
    """
    resolver = websocket.app.state.session_resolver
    hub = websocket.app.state.realtime_hub

    actor = await resolver.resolve(websocket.headers)
    if actor is None:
        await websocket.close(
            code=status.WS_1008_POLICY_VIOLATION, reason="Authentication required"
        )
        return

    try:
        requested_agency = UUID(agency_id)
    except ValueError:
        await websocket.close(
            code=status.WS_1008_POLICY_VIOLATION, reason="Invalid agency ID format"
        )
        return

    if not actor.belongs_to(requested_agency):
        await websocket.close(
            code=status.WS_1008_POLICY_VIOLATION,
            reason="You do not have access to this agency",
        )
        return

    if hub is None:
        # Redis backend: subscribers attach to Redis directly
        await websocket.close(
            code=status.WS_1011_INTERNAL_ERROR, reason="Realtime stream not available"
        )
        return

    channel = agency_channel(requested_agency)
    with hub.subscribe(channel) as subscription:
        await websocket.accept()
        logger.info(
            "Realtime subscriber connected", channel=channel, actor_id=str(actor.id)
        )
        forwarder = asyncio.create_task(_forward(websocket, subscription))
        receiver = asyncio.create_task(_drain_inbound(websocket))
        try:
            done, _ = await asyncio.wait(
                {forwarder, receiver}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (forwarder, receiver):
                task.cancel()
            for task in (forwarder, receiver):
                with contextlib.suppress(asyncio.CancelledError, Exception):
                    await task

    if receiver in done and isinstance(receiver.exception(), WebSocketDisconnect):
        logger.info("Realtime subscriber disconnected", channel=channel)
        return

    failed = forwarder if forwarder in done else receiver
    logger.warning(
        "Realtime stream stopped",
        channel=channel,
        error=repr(failed.exception()),
    )
    if websocket.client_state == WebSocketState.CONNECTED:
        with contextlib.suppress(RuntimeError, WebSocketDisconnect):
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
