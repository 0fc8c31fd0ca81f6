"""Pure geographic helpers shared by the route, motion and telemetry code.

Nothing here keeps state; every function is safe to call from any thread.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

# Mean Earth radius used by web map libraries for great-circle distance
EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class Point:
    """Immutable geographic coordinate in decimal degrees."""
    lat: float
    lng: float

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> "Point":
        lat, lng = pair
        return cls(float(lat), float(lng))

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


# Distance function between two points, in metres
Metric = Callable[[Point, Point], float]


def distance(a: Point, b: Point) -> float:
    """
    Great-circle (haversine) distance between two points in metres.

    Args:
        a: Origin.
        b: Destination.

    Returns:
        Distance in metres; 0 when the points coincide.
    """
    rlat1 = math.radians(a.lat)
    rlat2 = math.radians(b.lat)
    d_lat = rlat2 - rlat1
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(rlat1) * math.cos(rlat2) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing(origin: Point, target: Point) -> float:
    """
    Initial compass bearing from origin toward target, in degrees [0, 360).

    Coincident points have no direction; 0 is returned for them.
    """
    if origin == target:
        return 0.0
    rlat1 = math.radians(origin.lat)
    rlat2 = math.radians(target.lat)
    d_lng = math.radians(target.lng - origin.lng)
    y = math.sin(d_lng) * math.cos(rlat2)
    x = math.cos(rlat1) * math.sin(rlat2) - math.sin(rlat1) * math.cos(rlat2) * math.cos(d_lng)
    deg = (math.degrees(math.atan2(y, x)) + 360) % 360
    return 0.0 if deg >= 360 else deg


def lerp(a: Point, b: Point, t: float) -> Point:
    """
    Linear interpolation in latitude/longitude space.

    Not geodesic; fine for the short segments a route is made of.
    `t` is clamped to [0, 1].
    """
    t = max(0.0, min(1.0, t))
    return Point(a.lat + (b.lat - a.lat) * t, a.lng + (b.lng - a.lng) * t)
