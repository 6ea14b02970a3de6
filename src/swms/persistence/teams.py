"""Collection team persistence."""

from __future__ import annotations

from typing import Any

from ..db.supabase import require_client
from .base import execute, first_or_none

TABLE = "teams"


def list_teams() -> list[dict]:
    supabase = require_client()
    return execute(supabase.table(TABLE).select("*").order("name"), "list teams")


def get_team(team_id: str) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).select("*").eq("id", team_id).limit(1), f"load team {team_id}")
    return first_or_none(rows)


def find_team_by_name(name: str) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).select("*").eq("name", name).limit(1), f"look up team '{name}'")
    return first_or_none(rows)


def create_team(record: dict[str, Any]) -> dict:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).insert(record), "create team")
    return rows[0]


def update_team(team_id: str, patch: dict[str, Any]) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).update(patch).eq("id", team_id), f"update team {team_id}")
    return first_or_none(rows)


def delete_team(team_id: str) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).delete().eq("id", team_id), f"delete team {team_id}")
    return first_or_none(rows)
