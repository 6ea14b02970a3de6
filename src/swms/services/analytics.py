"""Operational analytics over complaints, tasks and bins."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..config import settings
from ..models.domain import Complaint, Task
from ..persistence import bins as bin_store
from ..persistence import complaints as complaint_store
from ..persistence import profiles as profile_store
from ..persistence import tasks as task_store
from .bins import bin_from_record


def _since(days: int, now: Optional[datetime] = None) -> datetime:
    return (now or datetime.now(timezone.utc)) - timedelta(days=days)


def waste_patterns(days: int = 14, now: Optional[datetime] = None) -> dict:
    """Complaints per day and bins-at-alert-level per day over the last ``days`` days."""

    since = _since(days, now)
    complaint_counts: Counter[str] = Counter()
    for record in complaint_store.list_complaints_since(since.isoformat()):
        complaint = Complaint.from_record(record)
        if complaint.created_at is not None:
            complaint_counts[complaint.created_at.date().isoformat()] += 1

    alert_counts: Counter[str] = Counter()
    for record in bin_store.list_bins():
        bin_ = bin_from_record(record)
        seen = bin_.sensor_last_seen
        if seen is None or bin_.fill_level < settings.bin_full_threshold:
            continue
        if seen.tzinfo is None:
            seen = seen.replace(tzinfo=timezone.utc)
        if seen >= since:
            alert_counts[seen.date().isoformat()] += 1

    return {
        "complaints_per_day": [{"date": day, "count": count} for day, count in sorted(complaint_counts.items())],
        "bin_alerts_per_day": [{"date": day, "alerts": count} for day, count in sorted(alert_counts.items())],
    }


def recurring_areas(limit: int = 10) -> list[dict]:
    """Addresses with the most complaints."""

    counts: Counter[str] = Counter()
    for record in complaint_store.list_complaints():
        complaint = Complaint.from_record(record)
        address = complaint.location.address if complaint.location else None
        if address:
            counts[address.strip()] += 1
    return [{"address": address, "count": count} for address, count in counts.most_common(limit)]


def staff_efficiency(days: int = 30, now: Optional[datetime] = None) -> list[dict]:
    """Completed tasks per staff member with average time from complaint to completion."""

    since = _since(days, now)
    completed: Counter[str] = Counter()
    durations: dict[str, list[float]] = defaultdict(list)
    for record in task_store.list_tasks(status="completed", completed_since=since.isoformat()):
        task = Task.from_record(record)
        completed[task.assigned_to] += 1
        created = task.complaint.created_at if task.complaint else None
        if task.completed_at and created:
            durations[task.assigned_to].append((task.completed_at - created).total_seconds())

    names = {str(row["id"]): row.get("name") for row in profile_store.get_profiles(list(completed))}
    results = []
    for staff_id, count in completed.most_common():
        samples = durations.get(staff_id) or []
        average = sum(samples) / len(samples) if samples else None
        results.append(
            {
                "staff_id": staff_id,
                "name": names.get(staff_id),
                "completed": count,
                "avg_resolution_hours": round(average / 3600, 2) if average is not None else None,
            }
        )
    return results


def export_rows(kind: str) -> tuple[list[str], list[list[object]]]:
    """Header and rows for the complaints or tasks export."""

    if kind == "tasks":
        tasks = [Task.from_record(record) for record in task_store.list_tasks()]
        names = _names_for({task.assigned_to for task in tasks})
        header = ["TaskID", "ComplaintID", "AssignedTo", "Status", "CompletedAt"]
        rows = [
            [
                task.id,
                task.complaint_id,
                names.get(task.assigned_to, ""),
                task.status,
                task.completed_at.isoformat() if task.completed_at else "",
            ]
            for task in tasks
        ]
        return header, rows

    complaints = [Complaint.from_record(record) for record in complaint_store.list_complaints()]
    names = _names_for({c.citizen_id for c in complaints} | {c.assigned_to for c in complaints if c.assigned_to})
    header = ["ComplaintID", "Citizen", "AssignedTo", "Status", "Priority", "CreatedAt"]
    rows = [
        [
            complaint.id,
            names.get(complaint.citizen_id, ""),
            names.get(complaint.assigned_to or "", ""),
            complaint.status,
            complaint.priority_score,
            complaint.created_at.isoformat() if complaint.created_at else "",
        ]
        for complaint in complaints
    ]
    return header, rows


def _names_for(user_ids: set[str]) -> dict[str, str]:
    ids = [user_id for user_id in user_ids if user_id]
    return {str(row["id"]): row.get("name") or "" for row in profile_store.get_profiles(ids)}
