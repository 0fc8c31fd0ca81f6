from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from rover.config import settings


class RoverClient:
    """Minimal async HTTP client for a running rover service.

    The service exposes:
      - GET  /rover/telemetry           -> current telemetry snapshot
      - POST /rover/{start,pause,reset} -> control transitions
      - GET  /rover/route, /rover/trail -> static route, recorded trail
      - POST /replay                    -> deterministic replay of a log
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or f"http://127.0.0.1:{settings.backend_port}").rstrip("/")
        # Single shared client for all service calls
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=5.0, transport=transport)

    async def get_telemetry(self) -> Dict[str, Any]:
        r = await self._client.get("/rover/telemetry")
        r.raise_for_status()
        return r.json()

    async def get_route(self) -> Dict[str, Any]:
        r = await self._client.get("/rover/route")
        r.raise_for_status()
        return r.json()

    async def get_trail(self) -> Dict[str, Any]:
        r = await self._client.get("/rover/trail")
        r.raise_for_status()
        return r.json()

    async def start(self) -> Dict[str, Any]:
        return await self._control("start")

    async def pause(self) -> Dict[str, Any]:
        return await self._control("pause")

    async def reset(self) -> Dict[str, Any]:
        return await self._control("reset")

    async def replay(self, log: List[Dict[str, Any]], **overrides: Any) -> Dict[str, Any]:
        r = await self._client.post("/replay", json={"log": log, **overrides})
        r.raise_for_status()
        return r.json()

    async def _control(self, action: str) -> Dict[str, Any]:
        r = await self._client.post(f"/rover/{action}")
        r.raise_for_status()
        return r.json()

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RoverClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
