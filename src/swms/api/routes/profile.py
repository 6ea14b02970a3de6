"""The caller's own profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...errors import SWMSError
from ...models.domain import Principal
from ...schemas.teams import ProfileModel, ProfileUpdateRequest
from ...services import profiles as profile_service
from ..deps import get_principal
from ..errors import http_error

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileModel, status_code=status.HTTP_200_OK)
def get_profile(principal: Principal = Depends(get_principal)) -> ProfileModel:
    try:
        return ProfileModel.from_domain(profile_service.get_profile(principal))
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.put("", response_model=ProfileModel, status_code=status.HTTP_200_OK)
def update_profile(payload: ProfileUpdateRequest, principal: Principal = Depends(get_principal)) -> ProfileModel:
    try:
        profile = profile_service.update_profile(principal, name=payload.name, team_name=payload.team_name)
        return ProfileModel.from_domain(profile)
    except SWMSError as exc:
        raise http_error(exc) from exc
