"""Eco-points endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...errors import SWMSError
from ...models.domain import Principal
from ...schemas.engagement import AwardRequest, AwardResponse, EcoPointsResponse, LeaderboardEntry
from ...services import engagement as engagement_service
from ..deps import get_principal, require_roles
from ..errors import http_error

router = APIRouter(prefix="/engagement", tags=["engagement"])


@router.get("/me", response_model=EcoPointsResponse, status_code=status.HTTP_200_OK)
def my_points(principal: Principal = Depends(get_principal)) -> EcoPointsResponse:
    try:
        return EcoPointsResponse(eco_points=engagement_service.get_eco_points(principal.id))
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.get("/leaderboard", response_model=List[LeaderboardEntry], status_code=status.HTTP_200_OK)
def leaderboard(
    limit: int = Query(default=20, ge=1, le=100),
    _: Principal = Depends(get_principal),
) -> List[LeaderboardEntry]:
    try:
        return [LeaderboardEntry(**entry) for entry in engagement_service.leaderboard(limit)]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.post("/award", response_model=AwardResponse, status_code=status.HTTP_200_OK)
def award(payload: AwardRequest, _: Principal = Depends(require_roles("admin"))) -> AwardResponse:
    try:
        balance = engagement_service.award_points(payload.user_id or "", payload.points)
        return AwardResponse(user_id=payload.user_id, eco_points=balance)
    except SWMSError as exc:
        raise http_error(exc) from exc
