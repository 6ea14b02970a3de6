from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient

from src.swms.api.deps import get_principal
from src.swms.events import broadcaster
from src.swms.main import create_app
from src.swms.models.domain import Principal
from src.swms.persistence import bins as bin_store
from src.swms.persistence import complaints as complaint_store
from src.swms.persistence import profiles as profile_store
from src.swms.persistence import tasks as task_store
from src.swms.persistence import teams as team_store

BASE_TIME = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


@dataclass
class FakeDatabase:
    """Dict-backed stand-in for the Supabase tables."""

    bins: dict[str, dict] = field(default_factory=dict)
    complaints: dict[str, dict] = field(default_factory=dict)
    tasks: dict[str, dict] = field(default_factory=dict)
    profiles: dict[str, dict] = field(default_factory=dict)
    teams: dict[str, dict] = field(default_factory=dict)
    _ids: count = field(default_factory=lambda: count(1))

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def next_timestamp(self) -> str:
        return (BASE_TIME + timedelta(minutes=len(self.complaints) + len(self.tasks))).isoformat()

    def add_bin(self, bin_id: str, lat: float | None, lng: float | None, fill_level: int, status: str = "normal", **extra) -> dict:
        location = None if lat is None and lng is None else {"lat": lat, "lng": lng}
        record = {
            "id": bin_id,
            "name": extra.pop("name", f"Bin {bin_id}"),
            "location": location,
            "fill_level": fill_level,
            "status": status,
            **extra,
        }
        self.bins[bin_id] = record
        return record

    def add_complaint(self, complaint_id: str, **fields) -> dict:
        record = {
            "id": complaint_id,
            "citizen_id": "citizen-1",
            "description": "Overflowing bin",
            "location": None,
            "status": "submitted",
            "priority_score": 1,
            "created_at": self.next_timestamp(),
            **fields,
        }
        self.complaints[complaint_id] = record
        return record

    def add_profile(self, user_id: str, name: str, eco_points: int = 0) -> dict:
        record = {"id": user_id, "name": name, "eco_points": eco_points, "created_at": BASE_TIME.isoformat()}
        self.profiles[user_id] = record
        return record

    def add_team(self, team_id: str, name: str, members: list[str] | None = None, **fields) -> dict:
        record = {
            "id": team_id,
            "name": name,
            "area": "General Area",
            "members": list(members or []),
            "status": "Active",
            "active_tasks": 0,
            "completed": 0,
            "created_at": BASE_TIME.isoformat(),
            **fields,
        }
        self.teams[team_id] = record
        return record


@pytest.fixture
def db(monkeypatch: pytest.MonkeyPatch) -> FakeDatabase:
    fake = FakeDatabase()

    # bins
    def create_bin(record):
        row = {"id": fake.next_id("bin"), "sensor_last_seen": None, "last_collected_at": None, **record}
        fake.bins[row["id"]] = row
        return dict(row)

    def update_bin(bin_id, patch):
        if bin_id not in fake.bins:
            return None
        fake.bins[bin_id].update(patch)
        return dict(fake.bins[bin_id])

    monkeypatch.setattr(bin_store, "create_bin", create_bin)
    monkeypatch.setattr(bin_store, "list_bins", lambda: [dict(r) for r in fake.bins.values()])
    monkeypatch.setattr(bin_store, "get_bin", lambda bin_id: dict(fake.bins[bin_id]) if bin_id in fake.bins else None)
    monkeypatch.setattr(
        bin_store,
        "find_overflow_bins",
        lambda threshold: [dict(r) for r in fake.bins.values() if r["fill_level"] >= threshold],
    )
    monkeypatch.setattr(
        bin_store,
        "find_bins_above_fill_threshold",
        lambda threshold: [dict(r) for r in fake.bins.values() if r["fill_level"] >= threshold],
    )
    monkeypatch.setattr(bin_store, "update_bin", update_bin)

    # complaints
    def create_complaint(record):
        row = {"id": fake.next_id("complaint"), "created_at": fake.next_timestamp(), **record}
        fake.complaints[row["id"]] = row
        return dict(row)

    def list_complaints(citizen_id=None):
        rows = [r for r in fake.complaints.values() if citizen_id is None or r["citizen_id"] == citizen_id]
        return [dict(r) for r in sorted(rows, key=lambda r: r["created_at"], reverse=True)]

    def list_prioritized():
        rows = sorted(fake.complaints.values(), key=lambda r: (-r["priority_score"], r["created_at"]))
        return [dict(r) for r in rows]

    def update_complaint(complaint_id, patch):
        if complaint_id not in fake.complaints:
            return None
        fake.complaints[complaint_id].update(patch)
        return dict(fake.complaints[complaint_id])

    monkeypatch.setattr(complaint_store, "create_complaint", create_complaint)
    monkeypatch.setattr(
        complaint_store,
        "find_complaint",
        lambda cid: dict(fake.complaints[cid]) if cid in fake.complaints else None,
    )
    monkeypatch.setattr(complaint_store, "list_complaints", list_complaints)
    monkeypatch.setattr(complaint_store, "list_prioritized_complaints", list_prioritized)
    monkeypatch.setattr(
        complaint_store,
        "list_complaints_since",
        lambda since: [dict(r) for r in fake.complaints.values() if r["created_at"] >= since],
    )
    monkeypatch.setattr(complaint_store, "update_complaint", update_complaint)

    # tasks
    def with_complaint(row):
        return {**row, "complaint": fake.complaints.get(row["complaint_id"])}

    def create_task(record):
        row = {"id": fake.next_id("task"), "created_at": fake.next_timestamp(), "completed_at": None, **record}
        fake.tasks[row["id"]] = row
        return dict(row)

    def list_tasks(status=None, completed_since=None):
        rows = list(fake.tasks.values())
        if status:
            rows = [r for r in rows if r["status"] == status]
        if completed_since:
            rows = [r for r in rows if r.get("completed_at") and r["completed_at"] >= completed_since]
        return [with_complaint(r) for r in rows]

    def update_task(task_id, patch):
        if task_id not in fake.tasks:
            return None
        fake.tasks[task_id].update(patch)
        return dict(fake.tasks[task_id])

    monkeypatch.setattr(task_store, "create_task", create_task)
    monkeypatch.setattr(task_store, "get_task", lambda tid: dict(fake.tasks[tid]) if tid in fake.tasks else None)
    monkeypatch.setattr(
        task_store,
        "list_tasks_for_staff",
        lambda staff_id: [with_complaint(r) for r in fake.tasks.values() if r["assigned_to"] == staff_id],
    )
    monkeypatch.setattr(task_store, "list_tasks", list_tasks)
    monkeypatch.setattr(task_store, "update_task", update_task)

    # profiles
    def increment_eco_points(user_id, points):
        if user_id not in fake.profiles:
            return None
        fake.profiles[user_id]["eco_points"] += points
        return dict(fake.profiles[user_id])

    def top_profiles(limit):
        rows = sorted(fake.profiles.values(), key=lambda r: -r["eco_points"])
        return [dict(r) for r in rows[:limit]]

    monkeypatch.setattr(profile_store, "get_profile", lambda uid: dict(fake.profiles[uid]) if uid in fake.profiles else None)
    monkeypatch.setattr(
        profile_store,
        "get_profiles",
        lambda ids: [dict(fake.profiles[uid]) for uid in ids if uid in fake.profiles],
    )
    monkeypatch.setattr(profile_store, "top_profiles", top_profiles)
    monkeypatch.setattr(profile_store, "increment_eco_points", increment_eco_points)

    def update_profile(user_id, patch):
        if user_id not in fake.profiles:
            return None
        fake.profiles[user_id].update(patch)
        return dict(fake.profiles[user_id])

    monkeypatch.setattr(profile_store, "update_profile", update_profile)

    # teams
    def create_team(record):
        row = {"id": fake.next_id("team"), "active_tasks": 0, "completed": 0, "created_at": BASE_TIME.isoformat(), **record}
        fake.teams[row["id"]] = row
        return dict(row)

    def find_team_by_name(name):
        return next((dict(r) for r in fake.teams.values() if r["name"] == name), None)

    def update_team(team_id, patch):
        if team_id not in fake.teams:
            return None
        fake.teams[team_id].update(patch)
        return dict(fake.teams[team_id])

    monkeypatch.setattr(team_store, "list_teams", lambda: [dict(r) for r in sorted(fake.teams.values(), key=lambda r: r["name"])])
    monkeypatch.setattr(team_store, "get_team", lambda tid: dict(fake.teams[tid]) if tid in fake.teams else None)
    monkeypatch.setattr(team_store, "find_team_by_name", find_team_by_name)
    monkeypatch.setattr(team_store, "create_team", create_team)
    monkeypatch.setattr(team_store, "update_team", update_team)
    monkeypatch.setattr(team_store, "delete_team", lambda tid: fake.teams.pop(tid, None))

    return fake


@pytest.fixture
def emitted():
    """Every event emitted while the test runs, in order."""
    messages: list[dict] = []
    token = broadcaster.subscribe(messages.append)
    yield messages
    broadcaster.unsubscribe(token)


class ApiSession:
    def __init__(self, client: TestClient) -> None:
        self.client = client
        self.principal = Principal(id="admin-1", role="admin", name="Admin")

    def login_as(self, role: str, user_id: str | None = None) -> None:
        self.principal = Principal(id=user_id or f"{role}-1", role=role)


@pytest.fixture
def api(db: FakeDatabase) -> ApiSession:
    app = create_app()
    session = ApiSession(TestClient(app))
    app.dependency_overrides[get_principal] = lambda: session.principal
    return session
