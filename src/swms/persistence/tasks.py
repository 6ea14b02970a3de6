"""Task persistence."""

from __future__ import annotations

from typing import Any

from ..db.supabase import require_client
from .base import execute, first_or_none

TABLE = "tasks"
# Embeds the related complaint row through the complaint_id foreign key
WITH_COMPLAINT = "*, complaint:complaints(*)"


def create_task(record: dict[str, Any]) -> dict:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).insert(record), "create task")
    return rows[0]


def get_task(task_id: str) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).select("*").eq("id", task_id).limit(1), f"load task {task_id}")
    return first_or_none(rows)


def list_tasks_for_staff(staff_id: str) -> list[dict]:
    supabase = require_client()
    return execute(
        supabase.table(TABLE).select(WITH_COMPLAINT).eq("assigned_to", staff_id).order("created_at", desc=True),
        f"list tasks for staff {staff_id}",
    )


def list_tasks(status: str | None = None, completed_since: str | None = None) -> list[dict]:
    supabase = require_client()
    query = supabase.table(TABLE).select(WITH_COMPLAINT)
    if status:
        query = query.eq("status", status)
    if completed_since:
        query = query.gte("completed_at", completed_since)
    return execute(query.order("created_at"), "list tasks")


def update_task(task_id: str, patch: dict[str, Any]) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).update(patch).eq("id", task_id), f"update task {task_id}")
    return first_or_none(rows)
