from __future__ import annotations

import asyncio
import json
import logging
from typing import Set
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from rover.schemas.events import WsMessage

logger = logging.getLogger("rover.ws")
router = APIRouter()


class WsHub:
    def __init__(self):
        self._clients: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        async with self._lock:
            self._clients.add(ws)

    async def disconnect(self, ws: WebSocket) -> None:
        async with self._lock:
            self._clients.discard(ws)

    async def broadcast(self, message: dict) -> None:
        # Copy references to avoid mutation while iterating
        async with self._lock:
            clients = list(self._clients)
        if not clients:
            return

        logger.debug("Broadcasting %s to %d client(s)", message.get("kind", "?"), len(clients))
        payload = json.dumps(message, ensure_ascii=False)
        dead = []
        for ws in clients:
            try:
                await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        # Clean dead sockets
        for ws in dead:
            await self.disconnect(ws)


hub = WsHub()


@router.websocket("/ws/rover")
async def ws_rover(ws: WebSocket):
    logger.info("WS connect")
    await hub.connect(ws)

    # Send the current state so a new subscriber does not wait for a tick
    try:
        from rover.api.routes_rover import get_rover_svc
        snap = get_rover_svc().snapshot()
        message = WsMessage(kind="telemetry", data=snap.to_dict())
        await ws.send_text(json.dumps(message.model_dump(), ensure_ascii=False))
    except Exception as e:
        logger.warning("WS initial snapshot failed: %s", e)

    try:
        while True:
            _ = await ws.receive_text()
    except WebSocketDisconnect:
        logger.info("WS disconnect")
        await hub.disconnect(ws)
    except Exception:
        logger.info("WS error/disconnect")
        await hub.disconnect(ws)
