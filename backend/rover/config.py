from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROUTE_FILE = Path(__file__).resolve().parent / "data" / "route.yaml"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ------------------------------------------------------------
    # Server
    # ------------------------------------------------------------
    backend_host: str = "0.0.0.0"
    backend_port: int = 8080
    environment: str = "development"  # development | staging | production

    # ------------------------------------------------------------
    # Rover motion
    # ------------------------------------------------------------
    speed_kmh: float = 18.0
    tick_interval_ms: int = 150
    trail_min_spacing_m: float = 5.0

    # ------------------------------------------------------------
    # Route data
    # ------------------------------------------------------------
    # YAML document with `waypoints` and `landmarks`; packaged tour when unset
    route_file: Optional[str] = None

    # ------------------------------------------------------------
    # CORS
    # ------------------------------------------------------------
    # Comma-separated origins, e.g. "http://localhost:3000,http://localhost:5173"
    cors_origins: str = "http://localhost:3000"

    # ------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------
    log_level: str = "INFO"

    @property
    def speed_mps(self) -> float:
        return self.speed_kmh * 1000.0 / 3600.0

    @property
    def tick_interval_s(self) -> float:
        return self.tick_interval_ms / 1000.0

    @property
    def route_path(self) -> Path:
        return Path(self.route_file) if self.route_file else DEFAULT_ROUTE_FILE

    @property
    def cors_origins_list(self) -> List[str]:
        return [x.strip() for x in self.cors_origins.split(",") if x.strip()]

    def validate_runtime(self) -> None:
        """Fail fast on settings the motion engine cannot run with."""
        problems = []
        if self.tick_interval_ms <= 0:
            problems.append("TICK_INTERVAL_MS must be positive")
        if self.speed_kmh < 0:
            problems.append("SPEED_KMH must not be negative")
        if self.trail_min_spacing_m < 0:
            problems.append("TRAIL_MIN_SPACING_M must not be negative")
        if problems:
            raise RuntimeError(f"Invalid rover configuration: {'; '.join(problems)}")


settings = Settings()
settings.validate_runtime()
