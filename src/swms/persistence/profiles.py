"""User profile persistence (names, roles and eco-points).

Accounts themselves live in the auth provider; this table only mirrors the
fields the application reads and the eco-point balance it maintains.
"""

from __future__ import annotations

from ..db.supabase import require_client
from .base import execute, first_or_none

TABLE = "profiles"


def get_profile(user_id: str) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).select("*").eq("id", user_id).limit(1), f"load profile {user_id}")
    return first_or_none(rows)


def get_profiles(user_ids: list[str]) -> list[dict]:
    if not user_ids:
        return []
    supabase = require_client()
    return execute(supabase.table(TABLE).select("id, name").in_("id", user_ids), "load profiles")


def top_profiles(limit: int) -> list[dict]:
    supabase = require_client()
    return execute(
        supabase.table(TABLE).select("id, name, eco_points").order("eco_points", desc=True).order("created_at").limit(limit),
        "load leaderboard",
    )


def increment_eco_points(user_id: str, points: int) -> dict | None:
    """Add points to a profile's balance. Returns the updated profile or None when missing.

    Read-then-write: concurrent awards to the same user may lose an increment.
    """
    profile = get_profile(user_id)
    if profile is None:
        return None
    supabase = require_client()
    balance = int(profile.get("eco_points") or 0) + points
    rows = execute(
        supabase.table(TABLE).update({"eco_points": balance}).eq("id", user_id),
        f"update eco points for {user_id}",
    )
    return first_or_none(rows)


def update_profile(user_id: str, patch: dict) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).update(patch).eq("id", user_id), f"update profile {user_id}")
    return first_or_none(rows)
