from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from rover.config import settings
from rover.core.engine import RoverEngine
from rover.core.motion import RunMode
from rover.core.telemetry import TelemetrySnapshot
from rover.schemas.events import WsMessage
from rover.services.route_loader import build_landmarks, build_route, load_route_document

logger = logging.getLogger("rover.service")

Broadcaster = Callable[[Dict[str, Any]], Awaitable[None]]


class RoverService:
    """Owns the rover engine and the periodic ticker that drives it.

    One asyncio task ticks the engine every `tick_interval_s` while the rover
    is moving and pushes each snapshot to the bound broadcaster. pause() and
    reset() cancel that task and wait for it to finish before touching the
    engine, so a tick that was already scheduled can never apply motion after
    the rover has been stopped. start(), pause() and reset() hold one control
    lock, so overlapping requests apply in the order they arrived.
    """

    def __init__(self, engine: RoverEngine, route_name: str = "route", tick_interval_s: Optional[float] = None):
        self.engine = engine
        self.route_name = route_name
        self.tick_interval_s = tick_interval_s if tick_interval_s is not None else settings.tick_interval_s
        self._task: Optional[asyncio.Task] = None
        self._broadcast: Optional[Broadcaster] = None
        self._control = asyncio.Lock()

    @classmethod
    def from_settings(cls) -> "RoverService":
        doc = load_route_document()
        engine = RoverEngine(
            route=build_route(doc.waypoints),
            landmarks=build_landmarks(doc.landmarks),
            speed_mps=settings.speed_mps,
            min_spacing_m=settings.trail_min_spacing_m,
        )
        logger.info("Route %r: %.0f m, %d landmarks, %.1f km/h, tick %d ms",
                    doc.name, engine.route.total_length, len(engine.landmarks),
                    settings.speed_kmh, settings.tick_interval_ms)
        return cls(engine, route_name=doc.name)

    def bind_broadcaster(self, broadcaster: Broadcaster) -> None:
        self._broadcast = broadcaster

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    async def start(self) -> TelemetrySnapshot:
        async with self._control:
            snap = self.engine.start()
            self._launch_ticker()
            await self._publish_status(snap)
            return snap

    async def pause(self) -> TelemetrySnapshot:
        async with self._control:
            await self._halt_ticker()
            snap = self.engine.pause()
            await self._publish_status(snap)
            return snap

    async def reset(self) -> TelemetrySnapshot:
        async with self._control:
            await self._halt_ticker()
            snap = self.engine.reset()
            await self._publish_status(snap)
            return snap

    async def tick(self) -> TelemetrySnapshot:
        """One manual tick, outside the timer. A no-op unless moving."""
        snap = self.engine.tick()
        await self._publish("telemetry", snap.to_dict())
        return snap

    def snapshot(self) -> TelemetrySnapshot:
        return self.engine.snapshot()

    @property
    def ticker_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def shutdown(self) -> None:
        async with self._control:
            await self._halt_ticker()

    # ------------------------------------------------------------------
    # Ticker
    # ------------------------------------------------------------------

    def _launch_ticker(self) -> None:
        if self.ticker_running:
            return  # already ticking
        self._task = asyncio.create_task(self._tick_loop())

    async def _halt_ticker(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Ticker halted")

    async def _tick_loop(self) -> None:
        logger.info("Ticker started (every %.3f s)", self.tick_interval_s)
        try:
            while True:
                await asyncio.sleep(self.tick_interval_s)
                snap = self.engine.tick()
                if snap.run_mode is not RunMode.MOVING:
                    break
                await self._publish("telemetry", snap.to_dict())
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Ticker crashed: %s", e)
            snap = self.engine.pause()
            await self._publish("status", {"status": "failed", "telemetry": snap.to_dict()})
        finally:
            logger.info("Ticker stopped")

    # ------------------------------------------------------------------
    # Broadcast
    # ------------------------------------------------------------------

    async def _publish_status(self, snap: TelemetrySnapshot) -> None:
        await self._publish("status", {"status": snap.run_mode.value, "telemetry": snap.to_dict()})

    async def _publish(self, kind: str, data: Dict[str, Any]) -> None:
        if self._broadcast:
            await self._broadcast(WsMessage(kind=kind, data=data).model_dump())
