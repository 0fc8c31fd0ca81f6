from __future__ import annotations


class DegenerateRouteError(ValueError):
    """Fewer than two distinct waypoints remain after dropping duplicates."""


class InvalidTickError(RuntimeError):
    """A motion tick was applied while the rover is not moving."""
