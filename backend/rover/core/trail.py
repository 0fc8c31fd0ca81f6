from __future__ import annotations

from typing import List, Optional

from rover.core.geo import Metric, Point, distance

DEFAULT_MIN_SPACING_M = 5.0


class TrailRecorder:
    """Polyline of visited positions with a minimum-spacing filter.

    A point is appended only when it lies more than `min_spacing_m` from the
    last recorded one, so a slow rover at a high tick rate does not grow the
    trail without bound.
    """

    def __init__(self, min_spacing_m: float = DEFAULT_MIN_SPACING_M, metric: Metric = distance) -> None:
        self.min_spacing_m = min_spacing_m
        self._metric = metric
        self._points: List[Point] = []

    def record(self, position: Point) -> bool:
        """Append `position` if far enough from the last point. Returns True if appended."""
        if self._points and self._metric(self._points[-1], position) <= self.min_spacing_m:
            return False
        self._points.append(position)
        return True

    def clear(self, seed: Optional[Point] = None) -> None:
        """Empty the trail, optionally re-seeding it with a starting position."""
        self._points.clear()
        if seed is not None:
            self._points.append(seed)

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    @property
    def last(self) -> Optional[Point]:
        return self._points[-1] if self._points else None

    def __len__(self) -> int:
        return len(self._points)
