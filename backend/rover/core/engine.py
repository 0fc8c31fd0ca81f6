from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional, Sequence

from rover.core import motion
from rover.core.geo import Point
from rover.core.motion import MotionState, RunMode
from rover.core.route import RouteModel
from rover.core.telemetry import Landmark, TelemetrySnapshot, derive_telemetry
from rover.core.trail import DEFAULT_MIN_SPACING_M, TrailRecorder

logger = logging.getLogger("rover.engine")

Clock = Callable[[], float]


class RoverEngine:
    """Owns the rover's motion state and trail; the single writer for both.

    Every mutation funnels through start/pause/reset/tick under one lock, and
    snapshot() reads under the same lock, so a host that calls in from
    several threads still sees consistent telemetry.

    Usage:
        engine = RoverEngine(route, landmarks, speed_mps=5.0)
        engine.start()
        # on every timer tick:
        snap = engine.tick()
    """

    def __init__(
        self,
        route: RouteModel,
        landmarks: Sequence[Landmark] = (),
        speed_mps: float = 5.0,
        min_spacing_m: float = DEFAULT_MIN_SPACING_M,
        clock: Clock = time.monotonic,
    ) -> None:
        self.route = route
        self.landmarks: List[Landmark] = list(landmarks)
        self.speed_mps = speed_mps
        self._clock = clock
        self._lock = threading.Lock()
        self._trail = TrailRecorder(min_spacing_m, metric=route.metric)
        self._state = motion.initial_state(route)
        self._trail.clear(seed=self._state.position)

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def start(self, now: Optional[float] = None) -> TelemetrySnapshot:
        with self._lock:
            if not self._state.is_moving:
                ts = self._clock() if now is None else now
                self._state = motion.start(self._state, now=ts)
                logger.info("Rover moving from %.1f m along route", self._state.distance_along_route)
            return self._snapshot()

    def pause(self) -> TelemetrySnapshot:
        with self._lock:
            if self._state.is_moving:
                self._state = motion.pause(self._state)
                logger.info("Rover paused at %.1f m (%.1f m travelled)",
                            self._state.distance_along_route, self._state.total_distance)
            return self._snapshot()

    def reset(self) -> TelemetrySnapshot:
        with self._lock:
            self._state = motion.reset(self.route)
            self._trail.clear(seed=self._state.position)
            logger.info("Rover reset to route start")
            return self._snapshot()

    def tick(self, now: Optional[float] = None) -> TelemetrySnapshot:
        """Advance by the time elapsed since the previous tick; ignored unless moving."""
        with self._lock:
            if self._state.is_moving:
                ts = self._clock() if now is None else now
                self._state = motion.tick(self._state, self.route, ts, self.speed_mps)
                self._trail.record(self._state.position)
            else:
                logger.debug("Tick ignored while %s", self._state.mode.value)
            return self._snapshot()

    # ------------------------------------------------------------------
    # Output surface
    # ------------------------------------------------------------------

    def snapshot(self) -> TelemetrySnapshot:
        with self._lock:
            return self._snapshot()

    @property
    def state(self) -> MotionState:
        with self._lock:
            return self._state

    @property
    def mode(self) -> RunMode:
        return self.state.mode

    @property
    def min_spacing_m(self) -> float:
        return self._trail.min_spacing_m

    @property
    def trail(self) -> List[Point]:
        with self._lock:
            return self._trail.points

    def _snapshot(self) -> TelemetrySnapshot:
        return derive_telemetry(self._state, self.route, self.landmarks, self.speed_mps, timestamp=self._state.last_tick)
