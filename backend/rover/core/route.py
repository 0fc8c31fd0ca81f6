"""Route geometry: contiguous segments with cumulative arc-length offsets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from rover.core.geo import Metric, Point, distance, lerp
from rover.errors import DegenerateRouteError

logger = logging.getLogger("rover.route")

WaypointLike = Union[Point, Sequence[float]]


@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point
    length: float        # metres
    start_offset: float  # metres from route start
    end_offset: float

    def contains(self, d: float) -> bool:
        return self.start_offset <= d <= self.end_offset


def _as_point(p: WaypointLike) -> Point:
    return p if isinstance(p, Point) else Point.from_pair(p)


class RouteModel:
    """Immutable arc-length parameterisation of a waypoint polyline.

    Build with :meth:`build`. Consecutive duplicate waypoints are dropped.
    A route with a single distinct point is still usable: it has one
    zero-length segment and ``total_length == 0``, so nothing downstream
    divides by zero.
    """

    def __init__(self, segments: Tuple[Segment, ...], metric: Metric = distance):
        self._segments = segments
        self._metric = metric
        self._total = segments[-1].end_offset

    @classmethod
    def build(
        cls,
        waypoints: Iterable[WaypointLike],
        metric: Metric = distance,
        strict: bool = False,
    ) -> "RouteModel":
        """
        Build a route from ordered waypoints.

        Args:
            waypoints: Points or (lat, lng) pairs.
            metric:    Distance function used for segment lengths.
            strict:    Raise DegenerateRouteError instead of degrading when
                       fewer than two distinct points remain.

        Raises:
            DegenerateRouteError: No waypoints at all, or a degenerate route
                                  in strict mode.
        """
        points: List[Point] = []
        for raw in waypoints:
            p = _as_point(raw)
            if points and metric(points[-1], p) == 0:
                continue
            points.append(p)

        if not points:
            raise DegenerateRouteError("route has no waypoints")

        if len(points) < 2:
            if strict:
                raise DegenerateRouteError(
                    f"route needs at least 2 distinct waypoints, got {len(points)}"
                )
            logger.warning("Degenerate route at %s; motion disabled", points[0])
            only = points[0]
            return cls((Segment(only, only, 0.0, 0.0, 0.0),), metric)

        segments: List[Segment] = []
        total = 0.0
        for a, b in zip(points, points[1:]):
            length = metric(a, b)
            segments.append(Segment(a, b, length, total, total + length))
            total += length
        return cls(tuple(segments), metric)

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    @property
    def total_length(self) -> float:
        return self._total

    @property
    def metric(self) -> Metric:
        return self._metric

    @property
    def is_degenerate(self) -> bool:
        return self._total <= 0

    @property
    def start(self) -> Point:
        return self._segments[0].start

    @property
    def end(self) -> Point:
        return self._segments[-1].end

    @property
    def waypoints(self) -> List[Point]:
        if self.is_degenerate:
            return [self.start]
        return [self._segments[0].start] + [s.end for s in self._segments]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def point_at_distance(self, d: float) -> Point:
        """Position at arc-length `d` metres from the start, clamped to the route."""
        if d <= 0 or self.is_degenerate:
            return self.start
        if d >= self._total:
            return self.end
        for seg in self._segments:
            if seg.contains(d):
                if seg.length <= 0:
                    return seg.start
                return lerp(seg.start, seg.end, (d - seg.start_offset) / seg.length)
        return self.end

    def distance(self, a: Point, b: Point) -> float:
        """Distance between two points under this route's metric."""
        return self._metric(a, b)
