"""Collection team endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import SWMSError
from ...models.domain import Principal
from ...schemas.teams import TeamCreateRequest, TeamDeletedResponse, TeamModel, TeamUpdateRequest
from ...services import teams as team_service
from ..deps import require_roles
from ..errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=List[TeamModel], status_code=status.HTTP_200_OK)
def list_teams(_: Principal = Depends(require_roles("admin", "staff"))) -> List[TeamModel]:
    try:
        return [TeamModel.from_domain(team) for team in team_service.list_teams()]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.post("", response_model=TeamModel, status_code=status.HTTP_200_OK)
def create_team(
    payload: TeamCreateRequest,
    _: Principal = Depends(require_roles("admin")),
) -> TeamModel:
    try:
        return TeamModel.from_domain(team_service.create_team(payload.name, payload.area, payload.members))
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error creating team: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create team: {str(exc)}",
        ) from exc


@router.put("/{team_id}", response_model=TeamModel, status_code=status.HTTP_200_OK)
def update_team(
    team_id: str,
    payload: TeamUpdateRequest,
    _: Principal = Depends(require_roles("admin")),
) -> TeamModel:
    try:
        team = team_service.update_team(
            team_id,
            name=payload.name,
            area=payload.area,
            members=payload.members,
            status=payload.status,
        )
        return TeamModel.from_domain(team)
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error updating team {team_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update team: {str(exc)}",
        ) from exc


@router.delete("/{team_id}", response_model=TeamDeletedResponse, status_code=status.HTTP_200_OK)
def delete_team(team_id: str, _: Principal = Depends(require_roles("admin"))) -> TeamDeletedResponse:
    try:
        team_service.delete_team(team_id)
        return TeamDeletedResponse(message="Team deleted successfully")
    except SWMSError as exc:
        raise http_error(exc) from exc
