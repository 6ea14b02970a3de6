"""Eco-points balances and leaderboard."""

from __future__ import annotations

import logging

from ..errors import InvalidInputError, NotFoundError
from ..persistence import profiles as profile_store

logger = logging.getLogger(__name__)


def get_eco_points(user_id: str) -> int:
    profile = profile_store.get_profile(user_id)
    return int((profile or {}).get("eco_points") or 0)


def leaderboard(limit: int = 20) -> list[dict]:
    return [
        {"id": str(row["id"]), "name": row.get("name"), "eco_points": int(row.get("eco_points") or 0)}
        for row in profile_store.top_profiles(limit)
    ]


def award_points(user_id: str, points: object) -> int:
    if isinstance(points, bool) or not isinstance(points, int):
        raise InvalidInputError("points must be an integer")
    if not user_id:
        raise InvalidInputError("userId is required")
    updated = profile_store.increment_eco_points(user_id, points)
    if updated is None:
        raise NotFoundError(f"User '{user_id}' not found")
    logger.info(f"Awarded {points} eco points to {user_id}")
    return int(updated.get("eco_points") or 0)
