"""WebSocket endpoint streaming creation notifications."""

import asyncio

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from eventhub.events.bus import NotificationBus, Subscription
from eventhub.events.topics import Topic

logger = structlog.get_logger()

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


async def _close_on_disconnect(
    websocket: WebSocket,
    subscription: Subscription,
) -> None:
    """Close the subscription once the client goes away."""
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        subscription.close()


@router.websocket("/{topic}")
async def subscribe(websocket: WebSocket, topic: str, user_id: str | None = None):
    """Stream records created on ``topic`` to the client.

    Messages:
    - {"type": "subscribed", "topic": ..., "user_id": ...} once registered
    - {"type": "data", "topic": ..., "payload": {...}} per delivered record
    """
    try:
        parsed = Topic.parse(topic)
    except ValueError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    bus: NotificationBus = websocket.app.state.bus
    await websocket.accept()
    subscription = bus.subscribe(parsed, user_id=user_id)
    watcher = asyncio.create_task(_close_on_disconnect(websocket, subscription))
    logger.info(
        "websocket_subscribed", topic=parsed.value, user_id=subscription.user_id
    )

    try:
        await websocket.send_json(
            {
                "type": "subscribed",
                "topic": parsed.value,
                "user_id": subscription.user_id,
            }
        )
        async for payload in subscription:
            await websocket.send_json(
                {
                    "type": "data",
                    "topic": parsed.value,
                    "payload": payload.to_payload(),
                }
            )
    except WebSocketDisconnect:
        pass  # Client went away mid-send
    finally:
        subscription.close()
        watcher.cancel()
        logger.info("websocket_unsubscribed", topic=parsed.value)
