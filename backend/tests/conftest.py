"""Shared fixtures: planar test routes, a controllable clock, and engine factories."""

from __future__ import annotations

import math

import pytest

from rover.core.engine import RoverEngine
from rover.core.geo import Point
from rover.core.route import RouteModel


def planar(a: Point, b: Point) -> float:
    """Treat degrees as metres so test routes have round lengths."""
    return math.hypot(b.lat - a.lat, b.lng - a.lng)


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float) -> float:
        self.now += dt
        return self.now


@pytest.fixture
def line_route() -> RouteModel:
    """(0,0) -> (0,1) -> (0,2), length 2 under the planar metric."""
    return RouteModel.build([(0, 0), (0, 1), (0, 2)], metric=planar)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def geo_route() -> RouteModel:
    """A short real-world loop (~1.3 km) measured with great-circle distance."""
    return RouteModel.build([
        (19.9975, 73.7898),
        (20.0040, 73.7922),
        (20.0033, 73.7928),
        (19.9979, 73.7890),
        (19.9975, 73.7898),
    ])


@pytest.fixture
def make_engine(clock):
    def _make(route, speed_mps=1.0, **kwargs):
        return RoverEngine(route, speed_mps=speed_mps, clock=clock, **kwargs)
    return _make
