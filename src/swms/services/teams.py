"""Collection team management."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..errors import InvalidInputError, NotFoundError
from ..models.domain import TEAM_STATUSES, Team
from ..persistence import profiles as profile_store
from ..persistence import teams as team_store

logger = logging.getLogger(__name__)

DEFAULT_AREA = "General Area"


def _clean_name(name: Optional[str]) -> str:
    if not name or not name.strip():
        raise InvalidInputError("Team name is required")
    return name.strip()


def _clean_members(members: Iterable[object]) -> list[str]:
    cleaned: list[str] = []
    for member in members:
        if not isinstance(member, str) or not member.strip():
            raise InvalidInputError("members must be a list of user ids")
        if member.strip() not in cleaned:
            cleaned.append(member.strip())
    return cleaned


def _ensure_unique(name: str, team_id: Optional[str] = None) -> None:
    existing = team_store.find_team_by_name(name)
    if existing is not None and str(existing["id"]) != team_id:
        raise InvalidInputError("Team name already exists")


def _with_member_names(teams: list[Team]) -> list[Team]:
    member_ids = sorted({member.id for team in teams for member in team.members})
    names = {str(row["id"]): row.get("name") for row in profile_store.get_profiles(member_ids)}
    for team in teams:
        for member in team.members:
            member.name = names.get(member.id)
    return teams


def list_teams() -> list[Team]:
    return _with_member_names([Team.from_record(record) for record in team_store.list_teams()])


def get_team(team_id: str) -> Team:
    record = team_store.get_team(team_id)
    if record is None:
        raise NotFoundError(f"Team '{team_id}' not found")
    return _with_member_names([Team.from_record(record)])[0]


def create_team(name: Optional[str], area: Optional[str] = None, members: Iterable[object] = ()) -> Team:
    """Create an active team. Names are unique."""
    team_name = _clean_name(name)
    _ensure_unique(team_name)
    record = team_store.create_team(
        {
            "name": team_name,
            "area": (area or "").strip() or DEFAULT_AREA,
            "members": _clean_members(members),
            "status": "Active",
        }
    )
    team = _with_member_names([Team.from_record(record)])[0]
    logger.info(f"Created team {team.id} ({team.name}) with {len(team.members)} members")
    return team


def update_team(
    team_id: str,
    name: Optional[str] = None,
    area: Optional[str] = None,
    members: Optional[Iterable[object]] = None,
    status: Optional[str] = None,
) -> Team:
    if team_store.get_team(team_id) is None:
        raise NotFoundError(f"Team '{team_id}' not found")

    patch: dict[str, object] = {}
    if name is not None:
        patch["name"] = _clean_name(name)
        _ensure_unique(patch["name"], team_id)
    if area is not None:
        patch["area"] = area.strip() or DEFAULT_AREA
    if members is not None:
        patch["members"] = _clean_members(members)
    if status is not None:
        if status not in TEAM_STATUSES:
            raise InvalidInputError(f"status must be one of {', '.join(TEAM_STATUSES)}")
        patch["status"] = status
    if not patch:
        raise InvalidInputError("name, area, members or status is required")

    record = team_store.update_team(team_id, patch)
    if record is None:
        raise NotFoundError(f"Team '{team_id}' not found")
    logger.info(f"Updated team {team_id}: {sorted(patch)}")
    return _with_member_names([Team.from_record(record)])[0]


def delete_team(team_id: str) -> None:
    if team_store.delete_team(team_id) is None:
        raise NotFoundError(f"Team '{team_id}' not found")
    logger.info(f"Deleted team {team_id}")
