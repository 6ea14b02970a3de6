"""Domain models for bins, complaints, tasks, teams and users."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


BIN_STATUSES = ("normal", "full", "overflow")
COMPLAINT_STATUSES = ("submitted", "assigned", "in_progress", "resolved")
TASK_STATUSES = ("assigned", "in_progress", "completed")
USER_ROLES = ("citizen", "staff", "admin")
TEAM_STATUSES = ("Active", "Break", "Inactive")


@dataclass(slots=True)
class Coordinate:
    """A latitude/longitude pair in degrees, optionally with a street address."""

    lat: Optional[float]
    lng: Optional[float]
    address: Optional[str] = None

    @classmethod
    def from_record(cls, value: Any) -> Optional["Coordinate"]:
        if not isinstance(value, dict):
            return None
        return cls(lat=value.get("lat"), lng=value.get("lng"), address=value.get("address"))

    def to_record(self) -> dict:
        record: dict[str, Any] = {"lat": self.lat, "lng": self.lng}
        if self.address is not None:
            record["address"] = self.address
        return record


@dataclass(slots=True)
class Bin:
    """A physical waste receptacle tracked with a fill-level sensor."""

    id: str
    name: str
    location: Optional[Coordinate]
    fill_level: int
    status: str
    sensor_last_seen: Optional[datetime] = None
    last_collected_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: dict) -> "Bin":
        return cls(
            id=str(record["id"]),
            name=record.get("name") or "",
            location=Coordinate.from_record(record.get("location")),
            fill_level=int(record.get("fill_level") or 0),
            status=record.get("status") or "normal",
            sensor_last_seen=_parse_timestamp(record.get("sensor_last_seen")),
            last_collected_at=_parse_timestamp(record.get("last_collected_at")),
        )


@dataclass(slots=True)
class Complaint:
    """A citizen-filed report of a waste issue at a location."""

    id: str
    citizen_id: str
    description: str
    location: Optional[Coordinate]
    status: str
    priority_score: int
    photo_url: Optional[str] = None
    assigned_to: Optional[str] = None
    resolution_anchor: Optional[dict] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: dict) -> "Complaint":
        return cls(
            id=str(record["id"]),
            citizen_id=str(record.get("citizen_id") or ""),
            description=record.get("description") or "",
            location=Coordinate.from_record(record.get("location")),
            status=record.get("status") or "submitted",
            priority_score=int(record.get("priority_score") or 0),
            photo_url=record.get("photo_url"),
            assigned_to=record.get("assigned_to"),
            resolution_anchor=record.get("resolution_anchor"),
            created_at=_parse_timestamp(record.get("created_at")),
        )


@dataclass(slots=True)
class Task:
    """Work item assigning a complaint to a staff member."""

    id: str
    complaint_id: str
    assigned_to: str
    status: str
    proof_photo_url: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    complaint: Optional[Complaint] = None

    @classmethod
    def from_record(cls, record: dict) -> "Task":
        nested = record.get("complaint")
        return cls(
            id=str(record["id"]),
            complaint_id=str(record.get("complaint_id") or ""),
            assigned_to=str(record.get("assigned_to") or ""),
            status=record.get("status") or "assigned",
            proof_photo_url=record.get("proof_photo_url"),
            completed_at=_parse_timestamp(record.get("completed_at")),
            created_at=_parse_timestamp(record.get("created_at")),
            complaint=Complaint.from_record(nested) if isinstance(nested, dict) else None,
        )


@dataclass(slots=True)
class TeamMember:
    id: str
    name: Optional[str] = None


@dataclass(slots=True)
class Team:
    """A collection crew covering an area."""

    id: str
    name: str
    area: str
    status: str
    members: list[TeamMember] = field(default_factory=list)
    active_tasks: int = 0
    completed: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: dict) -> "Team":
        return cls(
            id=str(record["id"]),
            name=record.get("name") or "",
            area=record.get("area") or "",
            status=record.get("status") or "Active",
            members=[TeamMember(id=str(member_id)) for member_id in record.get("members") or []],
            active_tasks=int(record.get("active_tasks") or 0),
            completed=int(record.get("completed") or 0),
            created_at=_parse_timestamp(record.get("created_at")),
        )


@dataclass(slots=True)
class UserProfile:
    """What a user sees about themselves."""

    id: str
    name: Optional[str]
    role: str
    eco_points: int = 0
    complaints_count: int = 0
    team_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: dict, role: str, complaints_count: int = 0) -> "UserProfile":
        return cls(
            id=str(record["id"]),
            name=record.get("name"),
            role=role,
            eco_points=int(record.get("eco_points") or 0),
            complaints_count=complaints_count,
            team_name=record.get("team_name"),
            created_at=_parse_timestamp(record.get("created_at")),
        )


@dataclass(slots=True)
class Principal:
    """The authenticated caller of a request."""

    id: str
    role: str
    name: Optional[str] = None
    claims: dict = field(default_factory=dict)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
