"""Bin (collection point) persistence."""

from __future__ import annotations

from typing import Any

from ..db.supabase import require_client
from .base import execute, first_or_none

TABLE = "bins"


def create_bin(record: dict[str, Any]) -> dict:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).insert(record), "create bin")
    return rows[0]


def list_bins() -> list[dict]:
    supabase = require_client()
    return execute(supabase.table(TABLE).select("*").order("created_at"), "list bins")


def get_bin(bin_id: str) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).select("*").eq("id", bin_id).limit(1), f"load bin {bin_id}")
    return first_or_none(rows)


def find_overflow_bins(threshold: int) -> list[dict]:
    """Bins whose fill level is at or above the overflow threshold."""
    supabase = require_client()
    return execute(
        supabase.table(TABLE).select("*").gte("fill_level", threshold),
        "load overflowing bins",
    )


def find_bins_above_fill_threshold(threshold: int) -> list[dict]:
    """Bins with fill_level >= threshold in a stable (creation) order."""
    supabase = require_client()
    return execute(
        supabase.table(TABLE).select("*").gte("fill_level", threshold).order("created_at").order("id"),
        f"load bins at or above {threshold}% full",
    )


def update_bin(bin_id: str, patch: dict[str, Any]) -> dict | None:
    supabase = require_client()
    rows = execute(supabase.table(TABLE).update(patch).eq("id", bin_id), f"update bin {bin_id}")
    return first_or_none(rows)
