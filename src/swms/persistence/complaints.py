"""Complaint persistence."""

from __future__ import annotations

from typing import Any

from ..db.supabase import require_client
from .base import execute, first_or_none

TABLE = "complaints"


def create_complaint(record: dict[str, Any]) -> dict:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).insert(record), "create complaint")
    return rows[0]


def find_complaint(complaint_id: str) -> dict | None:
    supabase = require_client()
    rows = execute(
        supabase.table(TABLE).select("*").eq("id", complaint_id).limit(1),
        f"load complaint {complaint_id}",
    )
    return first_or_none(rows)


def list_complaints(citizen_id: str | None = None) -> list[dict]:
    """All complaints newest first, optionally only those filed by one citizen."""
    supabase = require_client()
    query = supabase.table(TABLE).select("*")
    if citizen_id:
        query = query.eq("citizen_id", citizen_id)
    return execute(query.order("created_at", desc=True), "list complaints")


def list_prioritized_complaints() -> list[dict]:
    supabase = require_client()
    return execute(
        supabase.table(TABLE).select("*").order("priority_score", desc=True).order("created_at"),
        "list prioritized complaints",
    )


def list_complaints_since(since_iso: str) -> list[dict]:
    supabase = require_client()
    return execute(
        supabase.table(TABLE).select("*").gte("created_at", since_iso),
        "list recent complaints",
    )


def update_complaint(complaint_id: str, patch: dict[str, Any]) -> dict | None:
    supabase = require_client()
    rows = execute(
        supabase.table(TABLE).update(patch).eq("id", complaint_id),
        f"update complaint {complaint_id}",
    )
    return first_or_none(rows)
