"""Complaint and task request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from ..models.domain import Complaint, Task
from .common import CamelModel, LocationModel

ComplaintStatus = Literal["submitted", "assigned", "in_progress", "resolved"]


class ComplaintCreateRequest(CamelModel):
    description: str = Field(..., min_length=1)
    location: Optional[LocationModel] = None
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")


class PriorityRequest(CamelModel):
    description: Optional[str] = None
    location: Optional[LocationModel] = None


class PriorityResponse(CamelModel):
    priority_score: int = Field(alias="priorityScore")


class StatusUpdateRequest(CamelModel):
    status: Optional[ComplaintStatus] = None
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")


class ResolutionAnchorModel(CamelModel):
    hash: str
    anchored_at: Optional[datetime] = Field(default=None, alias="anchoredAt")


class ComplaintModel(CamelModel):
    id: str
    citizen_id: str = Field(alias="citizenId")
    description: str
    location: Optional[LocationModel] = None
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    status: str
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")
    priority_score: int = Field(alias="priorityScore")
    resolution_anchor: Optional[ResolutionAnchorModel] = Field(default=None, alias="resolutionAnchor")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @classmethod
    def from_domain(cls, complaint: Complaint) -> "ComplaintModel":
        anchor = complaint.resolution_anchor
        return cls(
            id=complaint.id,
            citizen_id=complaint.citizen_id,
            description=complaint.description,
            location=LocationModel.from_coordinate(complaint.location),
            photo_url=complaint.photo_url,
            status=complaint.status,
            assigned_to=complaint.assigned_to,
            priority_score=complaint.priority_score,
            resolution_anchor=(
                ResolutionAnchorModel(hash=anchor.get("hash", ""), anchored_at=anchor.get("anchored_at"))
                if isinstance(anchor, dict) and anchor.get("hash")
                else None
            ),
            created_at=complaint.created_at,
        )


class AnchorRequest(CamelModel):
    complaint_id: Optional[str] = Field(default=None, alias="complaintId")
    proof: Optional[str] = None


class AnchorResponse(CamelModel):
    complaint_id: str = Field(alias="complaintId")
    hash: str
    anchored_at: datetime = Field(alias="anchoredAt")


class TaskCreateRequest(CamelModel):
    complaint_id: str = Field(..., alias="complaintId")
    assigned_to: str = Field(..., alias="assignedTo")


class TaskCompleteRequest(CamelModel):
    proof_photo_url: Optional[str] = Field(default=None, alias="proofPhotoUrl")


class TaskModel(CamelModel):
    id: str
    complaint_id: str = Field(alias="complaintId")
    assigned_to: str = Field(alias="assignedTo")
    status: str
    proof_photo_url: Optional[str] = Field(default=None, alias="proofPhotoUrl")
    completed_at: Optional[datetime] = Field(default=None, alias="completedAt")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    complaint: Optional[ComplaintModel] = None

    @classmethod
    def from_domain(cls, task: Task) -> "TaskModel":
        return cls(
            id=task.id,
            complaint_id=task.complaint_id,
            assigned_to=task.assigned_to,
            status=task.status,
            proof_photo_url=task.proof_photo_url,
            completed_at=task.completed_at,
            created_at=task.created_at,
            complaint=ComplaintModel.from_domain(task.complaint) if task.complaint else None,
        )


ComplaintList = List[ComplaintModel]
