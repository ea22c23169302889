"""
Viewer WebSocket endpoint.

Dashboard viewers connect to ``/ws`` and receive every event published
while they are connected. Anything a viewer sends is read and discarded.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from callrelay.broadcaster import EventBroadcaster
from callrelay.dependencies import get_broadcaster

router = APIRouter(tags=["websocket"])


@router.websocket("/ws")
async def viewer_stream(
    ws: WebSocket,
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
) -> None:
    # Registered before accept; publish skips it until the handshake completes.
    broadcaster.register(ws)
    try:
        await ws.accept()
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.unregister(ws)
