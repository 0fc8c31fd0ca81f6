from __future__ import annotations

from fastapi import APIRouter

from rover import __version__
from rover.config import settings

router = APIRouter()


@router.get("/health")
def health():
    """Health check endpoint with motion settings."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "speed_kmh": settings.speed_kmh,
        "tick_interval_ms": settings.tick_interval_ms,
        "version": __version__,
    }
