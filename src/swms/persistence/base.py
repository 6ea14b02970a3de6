"""Shared helpers for Supabase-backed repositories."""

from __future__ import annotations

import logging
from typing import Any

from ..errors import StorageUnavailableError

logger = logging.getLogger(__name__)


def execute(query: Any, action: str) -> list[dict]:
    """Run a PostgREST query builder and return its rows.

    Driver and network errors are logged and re-raised as StorageUnavailableError
    so route handlers can report them uniformly.
    """
    try:
        response = query.execute()
    except StorageUnavailableError:
        raise
    except Exception as e:
        logger.error(f"Database error while trying to {action}: {e}")
        raise StorageUnavailableError(f"Failed to {action}: {e}") from e
    return list(response.data or [])


def first_or_none(rows: list[dict]) -> dict | None:
    return rows[0] if rows else None
