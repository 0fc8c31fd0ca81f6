from __future__ import annotations

from typing import Annotated, List, Tuple

from pydantic import BaseModel, Field


class PointOut(BaseModel):
    lat: float
    lng: float


Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]
# [lat, lng] pair as written in route files and replay requests
LatLng = Tuple[Latitude, Longitude]


class LandmarkIn(BaseModel):
    name: str
    lat: Latitude
    lng: Longitude


class RouteDocument(BaseModel):
    """On-disk route definition (YAML)."""
    name: str = "route"
    waypoints: List[LatLng] = Field(..., min_length=1)
    landmarks: List[LandmarkIn] = Field(default_factory=list)


class SegmentOut(BaseModel):
    start: PointOut
    end: PointOut
    length_m: float
    start_offset_m: float
    end_offset_m: float


class RouteOut(BaseModel):
    name: str
    total_length_m: float
    degenerate: bool
    waypoints: List[PointOut]
    segments: List[SegmentOut]


class TrailOut(BaseModel):
    points: List[PointOut]
    count: int
    min_spacing_m: float
