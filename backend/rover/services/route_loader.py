"""Loads the static route and landmark set the engine runs on.

The document is YAML:

    name: My loop
    waypoints:
      - [19.93, 73.52]
      - [19.97, 73.65]
    landmarks:
      - {name: Gate, lat: 19.95, lng: 73.60}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import yaml
from pydantic import ValidationError

from rover.config import settings
from rover.core.geo import Metric, Point, distance
from rover.core.route import RouteModel
from rover.core.telemetry import Landmark
from rover.schemas.route import LandmarkIn, RouteDocument

logger = logging.getLogger("rover.route_loader")


class RouteFileError(ValueError):
    """The route document is missing or malformed."""


def load_route_document(path: Optional[Union[str, Path]] = None) -> RouteDocument:
    """
    Read and validate a route document.

    Args:
        path: YAML file; settings.route_path when omitted.

    Raises:
        RouteFileError: The file cannot be read or does not validate.
    """
    route_path = Path(path) if path else settings.route_path
    try:
        with route_path.open("r", encoding="utf-8") as f:
            doc = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise RouteFileError(f"cannot read route file {route_path}: {e}") from e

    try:
        route_doc = RouteDocument(**doc)
    except (TypeError, ValidationError) as e:
        raise RouteFileError(f"invalid route file {route_path}: {e}") from e

    logger.info("Loaded route %r from %s (%d waypoints, %d landmarks)",
                route_doc.name, route_path, len(route_doc.waypoints), len(route_doc.landmarks))
    return route_doc


def build_route(waypoints: Sequence[Tuple[float, float]], metric: Metric = distance, strict: bool = False) -> RouteModel:
    return RouteModel.build([Point.from_pair(w) for w in waypoints], metric=metric, strict=strict)


def build_landmarks(landmarks: Sequence[LandmarkIn]) -> List[Landmark]:
    return [Landmark(name=lm.name, position=Point(lm.lat, lm.lng)) for lm in landmarks]
