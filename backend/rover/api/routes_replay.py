from __future__ import annotations

from fastapi import APIRouter, HTTPException

from rover.errors import DegenerateRouteError
from rover.schemas.replay import ReplayOut, ReplayRequest
from rover.services.replay_service import replay
from rover.services.route_loader import build_landmarks, build_route
from rover.api.routes_rover import get_rover_svc

router = APIRouter()


@router.post("/replay", response_model=ReplayOut)
def replay_log(body: ReplayRequest):
    """Replay a control/tick log on a fresh engine; the live rover is untouched.

    Expected JSON:
    {
      "log": [{"t": 0, "action": "start"}, {"t": 0.5, "action": "tick"}],
      "waypoints": [[lat, lng], ...],   (optional)
      "landmarks": [{"name", "lat", "lng"}], (optional)
      "speed_mps": 5.0                  (optional)
    }
    """
    engine = get_rover_svc().engine

    if body.waypoints is not None:
        try:
            route = build_route(body.waypoints, strict=True)
        except DegenerateRouteError as e:
            raise HTTPException(status_code=422, detail=str(e))
    else:
        route = engine.route

    landmarks = build_landmarks(body.landmarks) if body.landmarks is not None else engine.landmarks
    speed = body.speed_mps if body.speed_mps is not None else engine.speed_mps

    try:
        return replay(
            route,
            [entry.model_dump() for entry in body.log],
            landmarks=landmarks,
            speed_mps=speed,
            min_spacing_m=engine.min_spacing_m,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
