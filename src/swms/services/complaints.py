"""Complaint submission, listing, status workflow and resolution anchoring."""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone
from typing import Optional

from .. import events
from ..config import settings
from ..errors import InvalidInputError, NotFoundError
from ..models.domain import COMPLAINT_STATUSES, Bin, Complaint, Coordinate, Principal
from ..persistence import bins as bin_store
from ..persistence import complaints as complaint_store
from ..persistence import profiles as profile_store
from .bins import bin_from_record
from .priority import score_complaint

logger = logging.getLogger(__name__)


def compute_priority(description: Optional[str], location: Optional[Coordinate]) -> int:
    """Score against a snapshot of the currently overflowing bins."""
    overflow_bins: list[Bin] = []
    if location is not None:
        overflow_bins = [
            bin_from_record(record) for record in bin_store.find_overflow_bins(settings.bin_overflow_threshold)
        ]
    return score_complaint(description, location, overflow_bins)


def submit_complaint(
    citizen_id: str,
    description: str,
    location: Optional[Coordinate] = None,
    photo_url: Optional[str] = None,
) -> Complaint:
    if not description or not description.strip():
        raise InvalidInputError("description is required")

    priority_score = compute_priority(description, location)
    record = complaint_store.create_complaint(
        {
            "citizen_id": citizen_id,
            "description": description.strip(),
            "location": location.to_record() if location else None,
            "photo_url": photo_url or None,
            "status": "submitted",
            "priority_score": priority_score,
        }
    )
    complaint = Complaint.from_record(record)
    logger.info(f"Complaint {complaint.id} filed by {citizen_id} with priority {priority_score}")

    _award_reporting_points(citizen_id)
    events.emit(events.COMPLAINT_NEW, {"id": complaint.id, "status": complaint.status})
    return complaint


def _award_reporting_points(citizen_id: str) -> None:
    points = settings.eco_points_per_complaint
    if not points:
        return
    try:
        if profile_store.increment_eco_points(citizen_id, points) is None:
            logger.warning(f"No profile for citizen {citizen_id}; eco points not awarded")
    except Exception as e:
        logger.warning(f"Failed to award eco points to {citizen_id}: {e}")


def get_complaint(complaint_id: str) -> Complaint:
    record = complaint_store.find_complaint(complaint_id)
    if record is None:
        raise NotFoundError(f"Complaint '{complaint_id}' not found")
    return Complaint.from_record(record)


def list_complaints() -> list[Complaint]:
    return [Complaint.from_record(record) for record in complaint_store.list_complaints()]


def list_prioritized() -> list[Complaint]:
    return [Complaint.from_record(record) for record in complaint_store.list_prioritized_complaints()]


def list_for_user(principal: Principal) -> list[Complaint]:
    """Citizens see their own complaints; staff and admins see all of them."""
    citizen_id = principal.id if principal.role == "citizen" else None
    return [Complaint.from_record(record) for record in complaint_store.list_complaints(citizen_id=citizen_id)]


def check_transition(current: str, new: str) -> None:
    if new not in COMPLAINT_STATUSES:
        raise InvalidInputError(f"Unknown complaint status '{new}'")
    if current == "resolved" and new != "resolved":
        raise InvalidInputError("Resolved complaints cannot be reopened")
    if COMPLAINT_STATUSES.index(new) < COMPLAINT_STATUSES.index(current):
        raise InvalidInputError(f"Cannot move complaint from '{current}' back to '{new}'")


def update_complaint_status(
    complaint_id: str,
    status: Optional[str] = None,
    assigned_to: Optional[str] = None,
) -> Complaint:
    """Move a complaint forward through its workflow and/or reassign it.

    Resolved complaints are frozen apart from their resolution anchor.
    """
    current = get_complaint(complaint_id)
    if status is None and assigned_to is None:
        raise InvalidInputError("status or assignedTo is required")
    if current.status == "resolved":
        raise InvalidInputError("Resolved complaints cannot be modified")

    patch: dict[str, object] = {}
    if status is not None:
        check_transition(current.status, status)
        patch["status"] = status
    if assigned_to is not None:
        patch["assigned_to"] = assigned_to

    record = complaint_store.update_complaint(complaint_id, patch)
    if record is None:
        raise NotFoundError(f"Complaint '{complaint_id}' not found")
    updated = Complaint.from_record(record)
    logger.info(f"Complaint {complaint_id} now {updated.status} (assigned to {updated.assigned_to})")
    events.emit(
        events.COMPLAINT_UPDATE,
        {"id": updated.id, "status": updated.status, "assignedTo": updated.assigned_to},
    )
    return updated


def anchor_resolution(complaint_id: str, proof: Optional[str]) -> dict:
    """Store a SHA-256 fingerprint of the resolution proof on the complaint."""
    if not complaint_id or proof is None or not str(proof).strip():
        raise InvalidInputError("complaintId and proof required")

    digest = hashlib.sha256(str(proof).encode("utf-8")).hexdigest()
    anchored_at = datetime.now(timezone.utc).isoformat()
    record = complaint_store.update_complaint(
        complaint_id,
        {"resolution_anchor": {"hash": digest, "anchored_at": anchored_at}},
    )
    if record is None:
        raise NotFoundError(f"Complaint '{complaint_id}' not found")
    logger.info(f"Anchored resolution proof for complaint {complaint_id}")
    return {"complaint_id": str(record["id"]), "hash": digest, "anchored_at": anchored_at}
