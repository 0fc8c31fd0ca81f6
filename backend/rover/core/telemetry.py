"""Telemetry derived from the motion state, the route and the landmark set.

Numbers come first; the ``*_text`` fields are display conveniences built on
top of them. Landmark distances go through the route's own metric so they
always agree with how the route itself was measured.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from rover.core.geo import Point
from rover.core.motion import MotionState, RunMode
from rover.core.route import RouteModel

NO_VALUE = "–"

STATUS_LABELS = {
    RunMode.IDLE: ("Online · Idle", "online"),
    RunMode.MOVING: ("Online · Moving", "online"),
    RunMode.PAUSED: ("Online · Paused", "paused"),
}


@dataclass(frozen=True)
class Landmark:
    name: str
    position: Point


@dataclass(frozen=True)
class LandmarkDistance:
    name: str
    position: Point
    distance_m: float

    @property
    def distance_km(self) -> float:
        return round(self.distance_m / 1000.0, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lat": self.position.lat,
            "lng": self.position.lng,
            "distance_m": self.distance_m,
            "distance_km": self.distance_km,
            "distance_text": f"{format_km(self.distance_m)} km",
        }


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_km(meters: float) -> str:
    return f"{meters / 1000.0:.2f}"


def format_latlng(lat: float, lng: float) -> str:
    return f"{lat:.5f}, {lng:.5f}"


def format_eta(seconds: float) -> str:
    """'26s', '3m 5s', or an en dash when there is nothing left to wait for."""
    if not math.isfinite(seconds) or seconds <= 0:
        return NO_VALUE
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    if mins == 0:
        return f"{secs}s"
    return f"{mins}m {secs}s"


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TelemetrySnapshot:
    position: Point
    heading_deg: float
    run_mode: RunMode
    progress_percent: float
    distance_along_route_m: float
    total_distance_m: float
    remaining_m: float
    route_length_m: float
    eta_seconds: float
    speed_mps: float
    landmarks: List[LandmarkDistance] = field(default_factory=list)
    timestamp: Optional[float] = None

    @property
    def speed_kmh(self) -> float:
        return self.speed_mps * 3.6

    @property
    def eta_text(self) -> str:
        return format_eta(self.eta_seconds)

    @property
    def landmark_distances(self) -> Dict[str, float]:
        """Landmark name -> distance from the rover in km (2 dp)."""
        return {lm.name: lm.distance_km for lm in self.landmarks}

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.run_mode][0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat": self.position.lat,
            "lng": self.position.lng,
            "heading_deg": self.heading_deg,
            "run_mode": self.run_mode.value,
            "progress_percent": self.progress_percent,
            "distance_along_route_m": self.distance_along_route_m,
            "total_distance_m": self.total_distance_m,
            "remaining_m": self.remaining_m,
            "route_length_m": self.route_length_m,
            # JSON has no infinity
            "eta_seconds": self.eta_seconds if math.isfinite(self.eta_seconds) else None,
            "speed_mps": self.speed_mps,
            "speed_kmh": self.speed_kmh,
            "landmarks": [lm.to_dict() for lm in self.landmarks],
            "landmark_distances": self.landmark_distances,
            "coords_text": format_latlng(self.position.lat, self.position.lng),
            "distance_text": f"{format_km(self.total_distance_m)} km",
            "progress_text": f"{self.progress_percent:.1f}%",
            "eta_text": self.eta_text,
            "speed_text": f"{self.speed_kmh:.0f} km/h",
            "status_label": self.status_label,
            "status_mode": STATUS_LABELS[self.run_mode][1],
            "timestamp": self.timestamp,
        }


def landmark_distances(position: Point, landmarks: Sequence[Landmark], route: RouteModel) -> List[LandmarkDistance]:
    return [LandmarkDistance(lm.name, lm.position, route.distance(position, lm.position)) for lm in landmarks]


def derive_telemetry(
    state: MotionState,
    route: RouteModel,
    landmarks: Sequence[Landmark],
    speed_mps: float,
    timestamp: Optional[float] = None,
) -> TelemetrySnapshot:
    """Compute a telemetry snapshot. Pure; divisions are guarded for zero length and speed."""
    length = route.total_length
    progress = 100.0 * state.distance_along_route / length if length > 0 else 0.0
    remaining = max(length - state.distance_along_route, 0.0)
    eta = remaining / speed_mps if speed_mps > 0 else math.inf

    return TelemetrySnapshot(
        position=state.position,
        heading_deg=state.heading_deg,
        run_mode=state.mode,
        progress_percent=progress,
        distance_along_route_m=state.distance_along_route,
        total_distance_m=state.total_distance,
        remaining_m=remaining,
        route_length_m=length,
        eta_seconds=eta,
        speed_mps=speed_mps,
        landmarks=landmark_distances(state.position, landmarks, route),
        timestamp=timestamp,
    )
