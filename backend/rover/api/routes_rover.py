from __future__ import annotations

from fastapi import APIRouter
from typing import List

from rover.schemas.route import PointOut, RouteOut, SegmentOut, TrailOut
from rover.schemas.telemetry import LandmarkDistanceOut, TelemetryOut
from rover.services.rover_service import RoverService

router = APIRouter(prefix="/rover")
rover_svc: RoverService | None = None


def get_rover_svc() -> RoverService:
    assert rover_svc is not None, "RoverService not initialized"
    return rover_svc


def _point(p) -> PointOut:
    return PointOut(lat=p.lat, lng=p.lng)


@router.get("/telemetry", response_model=TelemetryOut)
def get_telemetry():
    return get_rover_svc().snapshot().to_dict()


@router.get("/route", response_model=RouteOut)
def get_route():
    svc = get_rover_svc()
    route = svc.engine.route
    return RouteOut(
        name=svc.route_name,
        total_length_m=route.total_length,
        degenerate=route.is_degenerate,
        waypoints=[_point(p) for p in route.waypoints],
        segments=[
            SegmentOut(
                start=_point(s.start),
                end=_point(s.end),
                length_m=s.length,
                start_offset_m=s.start_offset,
                end_offset_m=s.end_offset,
            )
            for s in route.segments
        ],
    )


@router.get("/landmarks", response_model=List[LandmarkDistanceOut])
def get_landmarks():
    """Landmarks with their current distance from the rover."""
    return get_rover_svc().snapshot().to_dict()["landmarks"]


@router.get("/trail", response_model=TrailOut)
def get_trail():
    engine = get_rover_svc().engine
    points = engine.trail
    return TrailOut(
        points=[_point(p) for p in points],
        count=len(points),
        min_spacing_m=engine.min_spacing_m,
    )


# Control surface. These are async so they run on the event loop alongside
# the ticker and never interleave with a tick.

@router.post("/start", response_model=TelemetryOut)
async def start():
    snap = await get_rover_svc().start()
    return snap.to_dict()


@router.post("/pause", response_model=TelemetryOut)
async def pause():
    snap = await get_rover_svc().pause()
    return snap.to_dict()


@router.post("/reset", response_model=TelemetryOut)
async def reset():
    snap = await get_rover_svc().reset()
    return snap.to_dict()


@router.post("/tick", response_model=TelemetryOut)
async def manual_tick():
    """Advance once by the wall-clock time since the last tick (test harnesses)."""
    snap = await get_rover_svc().tick()
    return snap.to_dict()
