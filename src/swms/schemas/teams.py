"""Team and profile schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from ..models.domain import Team, UserProfile
from .common import CamelModel

TeamStatus = Literal["Active", "Break", "Inactive"]


class TeamCreateRequest(CamelModel):
    name: Optional[str] = None
    area: Optional[str] = None
    members: List[str] = Field(default_factory=list)


class TeamUpdateRequest(CamelModel):
    name: Optional[str] = None
    area: Optional[str] = None
    members: Optional[List[str]] = None
    status: Optional[TeamStatus] = None


class TeamMemberModel(CamelModel):
    id: str
    name: Optional[str] = None


class TeamModel(CamelModel):
    id: str
    name: str
    area: str
    status: str
    members: List[TeamMemberModel] = Field(default_factory=list)
    active_tasks: int = Field(default=0, alias="activeTasks")
    completed: int = 0
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @classmethod
    def from_domain(cls, team: Team) -> "TeamModel":
        return cls(
            id=team.id,
            name=team.name,
            area=team.area,
            status=team.status,
            members=[TeamMemberModel(id=member.id, name=member.name) for member in team.members],
            active_tasks=team.active_tasks,
            completed=team.completed,
            created_at=team.created_at,
        )


class TeamDeletedResponse(CamelModel):
    message: str


class ProfileModel(CamelModel):
    id: str
    name: Optional[str] = None
    role: str
    eco_points: int = Field(alias="ecoPoints")
    complaints_count: int = Field(alias="complaintsCount")
    team_name: Optional[str] = Field(default=None, alias="teamName")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @classmethod
    def from_domain(cls, profile: UserProfile) -> "ProfileModel":
        return cls(
            id=profile.id,
            name=profile.name,
            role=profile.role,
            eco_points=profile.eco_points,
            complaints_count=profile.complaints_count,
            team_name=profile.team_name,
            created_at=profile.created_at,
        )


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = None
    team_name: Optional[str] = Field(default=None, alias="teamName")
