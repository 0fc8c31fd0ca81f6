from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from rover.schemas.route import LandmarkIn, LatLng, PointOut
from rover.schemas.telemetry import TelemetryOut

ReplayAction = Literal["start", "pause", "reset", "tick"]


class ReplayEntry(BaseModel):
    t: float = Field(..., description="Timestamp in seconds on the log's own clock")
    action: ReplayAction = "tick"


class ReplayRequest(BaseModel):
    log: List[ReplayEntry] = Field(..., min_length=1)
    # Route override; the service's loaded route is used when omitted
    waypoints: Optional[List[LatLng]] = None
    landmarks: Optional[List[LandmarkIn]] = None
    speed_mps: Optional[float] = Field(None, ge=0)


class ReplayFrame(BaseModel):
    t: float
    action: ReplayAction
    telemetry: TelemetryOut


class ReplayOut(BaseModel):
    frames: List[ReplayFrame]
    trail: List[PointOut]
    frame_count: int
    digest: str
