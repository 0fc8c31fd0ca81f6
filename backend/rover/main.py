from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rover import __version__
from rover.config import settings
from rover.observability.logging import configure_logging
from rover.api.routes_health import router as health_router
from rover.api.routes_rover import router as rover_router
from rover.api.routes_replay import router as replay_router
from rover.api.routes_ws import router as ws_router, hub
from rover.services.rover_service import RoverService

configure_logging()
logger = logging.getLogger("rover")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Rover Telemetry API")
    logger.info("   Environment: %s", settings.environment)
    logger.info("   Route: %s (%.0f m)", rover_service.route_name, rover_service.engine.route.total_length)

    yield

    logger.info("Shutting down...")
    await rover_service.shutdown()


app = FastAPI(
    title="Rover Telemetry API",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/")
def root():
    return {
        "name": "Rover Telemetry API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(health_router)
app.include_router(rover_router)
app.include_router(replay_router)
app.include_router(ws_router)

# Initialize RoverService and bind broadcaster
rover_service = RoverService.from_settings()
rover_service.bind_broadcaster(hub.broadcast)

# Inject into routes_rover module (simple shared singleton)
import rover.api.routes_rover as routes_rover_module
routes_rover_module.rover_svc = rover_service
