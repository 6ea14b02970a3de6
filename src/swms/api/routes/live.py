"""WebSocket stream of live bin and complaint events."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ...events import broadcaster

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


@router.websocket("/ws")
async def event_stream(websocket: WebSocket) -> None:
    """Forward every emitted event to the client as ``{"event", "data"}`` JSON.

    Events emitted while the client is disconnected are not replayed.
    """
    queue: asyncio.Queue = asyncio.Queue()
    token = broadcaster.subscribe(broadcaster.queue_listener(asyncio.get_running_loop(), queue))
    receiver: Optional[asyncio.Future] = None
    try:
        await websocket.accept()
        receiver = asyncio.ensure_future(websocket.receive_text())
        while True:
            getter = asyncio.ensure_future(queue.get())
            done, _ = await asyncio.wait({getter, receiver}, return_when=asyncio.FIRST_COMPLETED)
            if getter in done:
                await websocket.send_json(getter.result())
            else:
                getter.cancel()
            if receiver in done:
                # Client messages are only keep-alives; a disconnect raises here
                receiver.result()
                receiver = asyncio.ensure_future(websocket.receive_text())
    except WebSocketDisconnect:
        logger.debug(f"Event listener {token} disconnected")
    finally:
        if receiver is not None:
            receiver.cancel()
        broadcaster.unsubscribe(token)
