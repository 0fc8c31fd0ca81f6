from __future__ import annotations

"""Preflight checks for container startup.

- loads and validates the route document
- prints config summary
"""

from rover.config import settings
from rover.services.route_loader import build_route, load_route_document


def main():
    doc = load_route_document()
    route = build_route(doc.waypoints)
    print("Preflight OK" if not route.is_degenerate else "Preflight WARNING: degenerate route, rover cannot move")
    print(f"ROUTE_FILE={settings.route_path}")
    print(f"ROUTE={doc.name} ({len(route.segments)} segments, {route.total_length / 1000:.2f} km)")
    print(f"LANDMARKS={len(doc.landmarks)}")
    print(f"SPEED={settings.speed_kmh:.1f} km/h, TICK={settings.tick_interval_ms} ms")
    print(f"CORS_ORIGINS={settings.cors_origins}")


if __name__ == "__main__":
    main()
