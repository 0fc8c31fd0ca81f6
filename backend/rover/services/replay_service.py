"""
Replay Service
Re-runs a recorded control/tick log through a fresh engine, deterministically.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from rover.core.engine import RoverEngine
from rover.core.route import RouteModel
from rover.core.telemetry import Landmark
from rover.core.trail import DEFAULT_MIN_SPACING_M

ACTIONS = ("start", "pause", "reset", "tick")


def replay_digest(
    route: RouteModel,
    speed_mps: float,
    frames: List[Dict[str, Any]],
    trail: List[Dict[str, float]],
) -> str:
    """Fingerprint of a replay: the route and speed it ran on plus everything it produced.

    Keys are sorted and separators fixed, so equal inputs hash equally across runs.
    """
    body = {
        "route": [p.to_dict() for p in route.waypoints],
        "speed_mps": speed_mps,
        "frames": frames,
        "trail": trail,
    }
    data = json.dumps(body, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return "sha256:" + hashlib.sha256(data).hexdigest()


def replay(
    route: RouteModel,
    log: Iterable[Mapping[str, Any]],
    *,
    landmarks: Sequence[Landmark] = (),
    speed_mps: float = 5.0,
    min_spacing_m: float = DEFAULT_MIN_SPACING_M,
) -> Dict[str, Any]:
    """Feed a log of ``{"t": seconds, "action": ...}`` entries into a new engine.

    The engine's clock is the log itself, so the same log always yields the
    same frames.

    Returns:
        {
            "frames": [{"t": ..., "action": ..., "telemetry": {...}}, ...],
            "trail": [{"lat": ..., "lng": ...}, ...],
            "frame_count": n,
            "digest": "sha256:...",
        }

    Raises:
        ValueError: An entry names an unknown action.
    """
    clock_now = [0.0]
    engine = RoverEngine(
        route,
        landmarks,
        speed_mps=speed_mps,
        min_spacing_m=min_spacing_m,
        clock=lambda: clock_now[0],
    )

    frames: List[Dict[str, Any]] = []
    for entry in log:
        t = float(entry["t"])
        action = entry.get("action", "tick")
        if action not in ACTIONS:
            raise ValueError(f"Unknown replay action: {action!r}. Valid: {', '.join(ACTIONS)}")
        clock_now[0] = t
        snap = getattr(engine, action)()
        frames.append({"t": t, "action": action, "telemetry": snap.to_dict()})

    trail = [p.to_dict() for p in engine.trail]
    return {
        "frames": frames,
        "trail": trail,
        "frame_count": len(frames),
        "digest": replay_digest(route, speed_mps, frames, trail),
    }
