import pytest
from fastapi import WebSocket
from fastapi.testclient import TestClient

from src.swms.config import settings
from src.swms.events import broadcaster
from src.swms.main import create_app


def test_health_endpoint_is_public():
    client = TestClient(create_app())

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_role_gated_endpoint_requires_bearer_token():
    client = TestClient(create_app())

    response = client.get("/api/complaints")

    assert response.status_code == 401


def test_sensor_update_flow(api, db, emitted):
    db.add_bin("B1", 21.5, 39.2, 40)

    response = api.client.post(
        "/api/bins/B1/sensor-update",
        json={"fillLevel": 96},
        headers={"X-Sensor-Key": settings.sensor_key},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["fillLevel"] == 96
    assert payload["status"] == "overflow"
    assert [message["event"] for message in emitted] == ["bin:update", "bin:alert"]


def test_sensor_update_rejects_wrong_key(api, db, emitted):
    db.add_bin("B1", 21.5, 39.2, 40)

    response = api.client.post(
        "/api/bins/B1/sensor-update",
        json={"fillLevel": 96},
        headers={"X-Sensor-Key": "not-the-key"},
    )

    assert response.status_code == 401
    assert db.bins["B1"]["fill_level"] == 40
    assert emitted == []


def test_sensor_update_rejects_non_numeric_level(api, db):
    db.add_bin("B1", 21.5, 39.2, 40)

    response = api.client.post(
        "/api/bins/B1/sensor-update",
        json={"fillLevel": "full"},
        headers={"X-Sensor-Key": settings.sensor_key},
    )

    assert response.status_code == 400


def test_sensor_update_unknown_bin(api, db):
    response = api.client.post(
        "/api/bins/nope/sensor-update",
        json={"fillLevel": 10},
        headers={"X-Sensor-Key": settings.sensor_key},
    )

    assert response.status_code == 404


def test_admin_creates_bin_and_citizen_cannot(api, db):
    body = {"name": "Clock Tower", "location": {"lat": 21.49, "lng": 39.19}, "fillLevel": 81}

    created = api.client.post("/api/bins", json=body)
    assert created.status_code == 200
    assert created.json()["status"] == "full"

    api.login_as("citizen")
    assert api.client.post("/api/bins", json=body).status_code == 403
    assert api.client.get("/api/bins").status_code == 200


def test_optimize_route_end_to_end(api, db):
    db.add_bin("A", 0, 1, 90, status="full")
    db.add_bin("B", 0, 0.5, 85, status="full")
    db.add_bin("C", 0, 0.2, 40)
    api.login_as("staff")

    response = api.client.get("/api/routes/optimize", params={"startLat": 0, "startLng": 0})

    assert response.status_code == 200
    payload = response.json()
    assert payload["start"] == {"lat": 0.0, "lng": 0.0}
    assert [stop["id"] for stop in payload["stops"]] == ["B", "A"]
    assert payload["stops"][0]["distanceFromPrevMeters"] > 0
    assert payload["totalDistanceMeters"] == sum(stop["distanceFromPrevMeters"] for stop in payload["stops"])


def test_optimize_route_as_csv(api, db):
    db.add_bin("A", 0, 1, 90, status="full")

    response = api.client.get("/api/routes/optimize", params={"startLat": 0, "startLng": 0, "format": "csv"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert lines[0].startswith("sequence,bin_id")
    assert lines[1].startswith("1,A,")


def test_optimize_route_with_no_full_bins(api, db):
    db.add_bin("C", 0, 0.2, 10)

    response = api.client.get("/api/routes/optimize", params={"startLat": 1, "startLng": 2})

    assert response.status_code == 200
    assert response.json()["stops"] == []


def test_optimize_route_requires_numeric_start(api, db):
    response = api.client.get("/api/routes/optimize", params={"startLat": "north", "startLng": 0})
    assert response.status_code == 400

    response = api.client.get("/api/routes/optimize", params={"startLng": 0})
    assert response.status_code == 400


def test_optimize_route_forbidden_for_citizens(api, db):
    api.login_as("citizen")

    response = api.client.get("/api/routes/optimize", params={"startLat": 0, "startLng": 0})

    assert response.status_code == 403


def test_citizen_files_complaint_and_admin_updates_it(api, db, emitted):
    db.add_profile("citizen-7", "Ravi")
    api.login_as("citizen", "citizen-7")

    filed = api.client.post(
        "/api/complaints",
        json={
            "description": "Overflow near the school",
            "location": {"lat": 12.9716, "lng": 77.5946, "address": "MG Road"},
            "photoUrl": "https://cdn.example/photo.jpg",
        },
    )
    assert filed.status_code == 200
    complaint = filed.json()
    assert complaint["priorityScore"] == 3
    assert complaint["citizenId"] == "citizen-7"
    assert complaint["location"]["address"] == "MG Road"

    mine = api.client.get("/api/complaints/mine")
    assert [c["id"] for c in mine.json()] == [complaint["id"]]

    api.login_as("admin")
    updated = api.client.put(
        f"/api/complaints/{complaint['id']}/status",
        json={"status": "assigned", "assignedTo": "staff-1"},
    )
    assert updated.status_code == 200
    assert updated.json()["assignedTo"] == "staff-1"

    backwards = api.client.put(f"/api/complaints/{complaint['id']}/status", json={"status": "submitted"})
    assert backwards.status_code == 400

    assert [m["event"] for m in emitted] == ["complaint:new", "complaint:update"]
    assert db.profiles["citizen-7"]["eco_points"] == 10


def test_complaint_with_out_of_range_location_is_invalid_input(api, db):
    api.login_as("citizen")

    response = api.client.post(
        "/api/complaints",
        json={"description": "Trash", "location": {"lat": 123.0, "lng": 0.0}},
    )

    assert response.status_code == 400
    assert db.complaints == {}


def test_priority_preview(api, db):
    db.add_bin("B1", 12.9718, 77.5946, 97, status="overflow")

    response = api.client.post(
        "/api/complaints/priority",
        json={"description": "Behind the hospital", "location": {"lat": 12.9716, "lng": 77.5946}},
    )

    assert response.status_code == 200
    assert response.json() == {"priorityScore": 6}


def test_update_unknown_complaint_is_404(api, db):
    response = api.client.put("/api/complaints/missing/status", json={"status": "assigned"})

    assert response.status_code == 404


def test_staff_completes_task(api, db):
    db.add_complaint("C1")
    task = api.client.post("/api/tasks", json={"complaintId": "C1", "assignedTo": "staff-9"}).json()

    api.login_as("staff", "staff-9")
    mine = api.client.get("/api/tasks/mine").json()
    assert [t["id"] for t in mine] == [task["id"]]
    assert mine[0]["complaint"]["id"] == "C1"

    done = api.client.put(f"/api/tasks/{task['id']}/complete", json={"proofPhotoUrl": "https://cdn.example/p.jpg"})
    assert done.status_code == 200
    assert done.json()["status"] == "completed"
    assert db.complaints["C1"]["status"] == "resolved"


def test_engagement_endpoints(api, db):
    db.add_profile("citizen-1", "Asha", eco_points=30)
    db.add_profile("citizen-2", "Ravi", eco_points=50)

    awarded = api.client.post("/api/engagement/award", json={"userId": "citizen-1", "points": 25})
    assert awarded.json() == {"userId": "citizen-1", "ecoPoints": 55}

    bad = api.client.post("/api/engagement/award", json={"userId": "citizen-1", "points": "lots"})
    assert bad.status_code == 400

    board = api.client.get("/api/engagement/leaderboard").json()
    assert [entry["name"] for entry in board] == ["Asha", "Ravi"]

    api.login_as("citizen", "citizen-2")
    assert api.client.get("/api/engagement/me").json() == {"ecoPoints": 50}


def test_anchor_resolution_endpoint(api, db):
    db.add_complaint("C1", status="resolved")

    response = api.client.post("/api/blockchain/anchor-resolution", json={"complaintId": "C1", "proof": "abc"})

    assert response.status_code == 200
    assert len(response.json()["hash"]) == 64

    missing = api.client.post("/api/blockchain/anchor-resolution", json={"complaintId": "C1"})
    assert missing.status_code == 400


def test_websocket_receives_emitted_events():
    client = TestClient(create_app())

    with client.websocket_connect("/ws") as websocket:
        broadcaster.emit("bin:alert", {"id": "B1", "level": 97, "status": "overflow"})
        message = websocket.receive_json()

    assert message == {"event": "bin:alert", "data": {"id": "B1", "level": 97, "status": "overflow"}}


def test_websocket_listener_released_when_handshake_fails(monkeypatch):
    async def failing_accept(self, *args, **kwargs):
        raise RuntimeError("handshake failed")

    monkeypatch.setattr(WebSocket, "accept", failing_accept)
    client = TestClient(create_app())
    listeners_before = broadcaster.listener_count

    with pytest.raises(RuntimeError):
        with client.websocket_connect("/ws"):
            pass

    assert broadcaster.listener_count == listeners_before
