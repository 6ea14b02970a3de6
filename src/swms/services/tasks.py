"""Staff task workflow."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from .. import events
from ..errors import InvalidInputError, NotFoundError
from ..models.domain import Task
from ..persistence import complaints as complaint_store
from ..persistence import tasks as task_store
from .complaints import check_transition

logger = logging.getLogger(__name__)


def create_task(complaint_id: str, assigned_to: str) -> Task:
    """Assign a complaint to a staff member.

    A submitted complaint moves to ``assigned``. A complaint already in progress
    keeps its status and only changes assignee.
    """
    if not complaint_id or not assigned_to:
        raise InvalidInputError("complaintId and assignedTo are required")

    complaint = complaint_store.find_complaint(complaint_id)
    if complaint is None:
        raise NotFoundError(f"Complaint '{complaint_id}' not found")
    current = complaint.get("status") or "submitted"
    if current == "resolved":
        raise InvalidInputError("Resolved complaints cannot be assigned")

    patch: dict[str, object] = {"assigned_to": assigned_to}
    if current != "in_progress":
        check_transition(current, "assigned")
        patch["status"] = "assigned"
    new_status = patch.get("status", current)

    task = Task.from_record(
        task_store.create_task({"complaint_id": complaint_id, "assigned_to": assigned_to, "status": "assigned"})
    )
    complaint_store.update_complaint(complaint_id, patch)
    logger.info(f"Task {task.id} created for complaint {complaint_id} ({new_status}), assigned to {assigned_to}")
    events.emit(events.COMPLAINT_UPDATE, {"id": complaint_id, "status": new_status, "assignedTo": assigned_to})
    return task


def list_tasks_for_staff(staff_id: str) -> list[Task]:
    return [Task.from_record(record) for record in task_store.list_tasks_for_staff(staff_id)]


def complete_task(task_id: str, staff_id: str, proof_photo_url: Optional[str] = None) -> Task:
    """Close a task with optional photo proof and resolve its complaint."""
    record = task_store.get_task(task_id)
    if record is None or str(record.get("assigned_to")) != staff_id:
        raise NotFoundError(f"Task '{task_id}' not found")
    if record.get("status") == "completed":
        return Task.from_record(record)

    updated = task_store.update_task(
        task_id,
        {
            "status": "completed",
            "proof_photo_url": proof_photo_url or None,
            "completed_at": datetime.now(timezone.utc).isoformat(),
        },
    )
    if updated is None:
        raise NotFoundError(f"Task '{task_id}' not found")
    task = Task.from_record(updated)

    complaint_store.update_complaint(task.complaint_id, {"status": "resolved"})
    logger.info(f"Task {task_id} completed; complaint {task.complaint_id} resolved")
    events.emit(
        events.COMPLAINT_UPDATE,
        {"id": task.complaint_id, "status": "resolved", "assignedTo": task.assigned_to},
    )
    return task
