"""Rover motion state machine.

State is an immutable :class:`MotionState`; every transition is a plain
function returning a new state, so the same code runs under a real timer,
a test harness or a replay log::

    state = initial_state(route)
    state = start(state, now=t0)
    state = tick(state, route, t0 + 0.15, speed_mps=5.0)

Idle --start--> Moving --pause--> Paused --start--> Moving
any  --reset--> Idle
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from rover.core.geo import Point, bearing
from rover.core.route import RouteModel
from rover.errors import InvalidTickError

logger = logging.getLogger("rover.motion")


class RunMode(str, Enum):
    IDLE = "idle"
    MOVING = "moving"
    PAUSED = "paused"


@dataclass(frozen=True)
class MotionState:
    position: Point
    distance_along_route: float = 0.0   # metres, in [0, route length)
    total_distance: float = 0.0         # metres, monotonic, ignores wrap
    heading_deg: float = 0.0
    last_tick: Optional[float] = None   # seconds, caller's clock
    mode: RunMode = RunMode.IDLE

    @property
    def is_moving(self) -> bool:
        return self.mode is RunMode.MOVING


def initial_state(route: RouteModel) -> MotionState:
    return MotionState(position=route.point_at_distance(0.0))


def start(state: MotionState, now: Optional[float] = None) -> MotionState:
    """Idle|Paused -> Moving.

    The tick reference is reset to `now` (or cleared when not given, in which
    case the first tick only records its timestamp). No-op when already moving.
    """
    if state.is_moving:
        return state
    return replace(state, mode=RunMode.MOVING, last_tick=now)


def pause(state: MotionState) -> MotionState:
    """Moving -> Paused, position and counters frozen. No-op otherwise."""
    if not state.is_moving:
        return state
    return replace(state, mode=RunMode.PAUSED)


def reset(route: RouteModel) -> MotionState:
    """Any state -> Idle at the start of the route with zeroed counters."""
    return initial_state(route)


def advance(state: MotionState, route: RouteModel, now: float, speed_mps: float) -> MotionState:
    """Apply one tick of motion.

    Raises:
        InvalidTickError: The rover is not moving.
    """
    if not state.is_moving:
        raise InvalidTickError(f"tick while {state.mode.value}")

    if state.last_tick is None:
        # Nothing measured yet; only anchor the clock.
        return replace(state, last_tick=now)

    dt = max(now - state.last_tick, 0.0)
    if route.is_degenerate:
        return replace(state, last_tick=now)

    step = speed_mps * dt
    along = state.distance_along_route + step
    length = route.total_length
    if along >= length:
        # Closed loop: wrap back toward the start rather than bounce.
        along = math.fmod(along, length)

    position = route.point_at_distance(along)
    heading = state.heading_deg
    if position != state.position:
        heading = bearing(state.position, position)

    return replace(
        state,
        position=position,
        distance_along_route=along,
        total_distance=state.total_distance + step,
        heading_deg=heading,
        last_tick=now,
    )


def tick(state: MotionState, route: RouteModel, now: float, speed_mps: float) -> MotionState:
    """Like :func:`advance`, but a tick outside Moving is silently ignored."""
    try:
        return advance(state, route, now, speed_mps)
    except InvalidTickError as e:
        logger.debug("Ignoring %s", e)
        return state
