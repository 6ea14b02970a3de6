"""The signed-in user's own profile."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import InvalidInputError, NotFoundError
from ..models.domain import Principal, UserProfile
from ..persistence import complaints as complaint_store
from ..persistence import profiles as profile_store
from ..persistence import teams as team_store

logger = logging.getLogger(__name__)


def _build_profile(record: dict, principal: Principal) -> UserProfile:
    complaints_count = 0
    if principal.role == "citizen":
        complaints_count = len(complaint_store.list_complaints(citizen_id=principal.id))
    return UserProfile.from_record(record, principal.role, complaints_count)


def get_profile(principal: Principal) -> UserProfile:
    """Name, role, eco points, team and, for citizens, how many complaints they filed."""
    record = profile_store.get_profile(principal.id)
    if record is None:
        raise NotFoundError("User not found")
    return _build_profile(record, principal)


def update_profile(principal: Principal, name: Optional[str] = None, team_name: Optional[str] = None) -> UserProfile:
    """Change display name and/or team. An empty team name leaves the team."""
    if profile_store.get_profile(principal.id) is None:
        raise NotFoundError("User not found")

    patch: dict[str, object] = {}
    if name is not None:
        if not name.strip():
            raise InvalidInputError("name cannot be empty")
        patch["name"] = name.strip()
    if team_name is not None:
        team_name = team_name.strip()
        if team_name and team_store.find_team_by_name(team_name) is None:
            raise InvalidInputError(f"Unknown team '{team_name}'")
        patch["team_name"] = team_name or None
    if not patch:
        raise InvalidInputError("name or teamName is required")

    record = profile_store.update_profile(principal.id, patch)
    if record is None:
        raise NotFoundError("User not found")
    logger.info(f"Profile {principal.id} updated: {sorted(patch)}")
    return _build_profile(record, principal)
