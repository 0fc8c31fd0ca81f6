"""API smoke tests using FastAPI TestClient."""

import pytest
from fastapi.testclient import TestClient

from rover.main import app


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c
        c.post("/rover/reset")


def test_root(client: TestClient):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["speed_kmh"] == 18.0
    assert data["tick_interval_ms"] == 150


def test_telemetry_idle_after_reset(client: TestClient):
    client.post("/rover/reset")
    r = client.get("/rover/telemetry")
    assert r.status_code == 200
    data = r.json()
    assert data["run_mode"] == "idle"
    assert data["status_label"] == "Online · Idle"
    assert data["progress_percent"] == 0.0
    assert data["speed_text"] == "18 km/h"
    assert (data["lat"], data["lng"]) == (19.9373, 73.5292)
    assert len(data["landmarks"]) == 5
    assert data["landmark_distances"]["Trimbakeshwar Temple"] == 0.0


def test_route(client: TestClient):
    data = client.get("/rover/route").json()
    assert data["name"] == "Nashik temple loop"
    assert data["degenerate"] is False
    assert len(data["waypoints"]) == 10
    assert len(data["segments"]) == 9
    assert data["segments"][0]["start_offset_m"] == 0.0
    assert data["segments"][-1]["end_offset_m"] == pytest.approx(data["total_length_m"])


def test_landmarks(client: TestClient):
    data = client.get("/rover/landmarks").json()
    assert [lm["name"] for lm in data][0] == "Ramkund (Godavari Ghat)"
    assert all(lm["distance_km"] >= 0 for lm in data)


def test_start_pause_reset_cycle(client: TestClient):
    r = client.post("/rover/start")
    assert r.status_code == 200
    assert r.json()["run_mode"] == "moving"

    # idempotent
    assert client.post("/rover/start").json()["run_mode"] == "moving"

    paused = client.post("/rover/pause").json()
    assert paused["run_mode"] == "paused"
    assert paused["status_mode"] == "paused"
    again = client.post("/rover/pause").json()
    assert again["total_distance_m"] == paused["total_distance_m"]

    reset = client.post("/rover/reset").json()
    assert reset["run_mode"] == "idle"
    assert reset["total_distance_m"] == 0.0

    trail = client.get("/rover/trail").json()
    assert set(trail) == {"points", "count", "min_spacing_m"}
    assert trail["count"] == 1
    assert trail["min_spacing_m"] == 5.0


def test_manual_tick_while_idle(client: TestClient):
    client.post("/rover/reset")
    r = client.post("/rover/tick")
    assert r.status_code == 200
    assert r.json()["total_distance_m"] == 0.0


def test_replay_with_custom_route(client: TestClient):
    payload = {
        "log": [{"t": 0, "action": "start"}, {"t": 2, "action": "tick"}],
        "waypoints": [[0, 0], [0, 0.01]],
        "speed_mps": 10,
    }
    r = client.post("/replay", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert data["frame_count"] == 2
    assert data["frames"][1]["telemetry"]["total_distance_m"] == pytest.approx(20.0)
    assert data["digest"].startswith("sha256:")


def test_replay_on_live_route_leaves_rover_untouched(client: TestClient):
    client.post("/rover/reset")
    r = client.post("/replay", json={"log": [{"t": 0, "action": "start"}, {"t": 60, "action": "tick"}]})
    assert r.status_code == 200
    assert r.json()["frames"][1]["telemetry"]["total_distance_m"] == pytest.approx(300.0)
    assert client.get("/rover/telemetry").json()["run_mode"] == "idle"


def test_replay_rejects_degenerate_route(client: TestClient):
    payload = {"log": [{"t": 0, "action": "start"}], "waypoints": [[1, 1], [1, 1]]}
    r = client.post("/replay", json=payload)
    assert r.status_code == 422


def test_replay_rejects_out_of_range_waypoints(client: TestClient):
    for bad in ([[91, 0], [0, 1]], [[0, 0], [0, -181]]):
        r = client.post("/replay", json={"log": [{"t": 0, "action": "start"}], "waypoints": bad})
        assert r.status_code == 422


def test_replay_rejects_unknown_action(client: TestClient):
    r = client.post("/replay", json={"log": [{"t": 0, "action": "jump"}]})
    assert r.status_code == 422


def test_websocket_sends_current_snapshot(client: TestClient):
    client.post("/rover/reset")
    with client.websocket_connect("/ws/rover") as ws:
        msg = ws.receive_json()
    assert msg["kind"] == "telemetry"
    assert msg["data"]["run_mode"] == "idle"
