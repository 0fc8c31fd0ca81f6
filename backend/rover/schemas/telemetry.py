from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel


class LandmarkDistanceOut(BaseModel):
    name: str
    lat: float
    lng: float
    distance_m: float
    distance_km: float
    distance_text: str


class TelemetryOut(BaseModel):
    lat: float
    lng: float
    heading_deg: float
    run_mode: str  # idle|moving|paused
    progress_percent: float
    distance_along_route_m: float
    total_distance_m: float
    remaining_m: float
    route_length_m: float
    eta_seconds: Optional[float] = None  # None when the rover can never arrive
    speed_mps: float
    speed_kmh: float

    landmarks: List[LandmarkDistanceOut] = []
    landmark_distances: Dict[str, float] = {}

    # Display strings
    coords_text: str
    distance_text: str
    progress_text: str
    eta_text: str
    speed_text: str
    status_label: str
    status_mode: str

    timestamp: Optional[float] = None
