"""Complaint endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import SWMSError
from ...models.domain import Principal
from ...schemas.complaints import (
    ComplaintCreateRequest,
    ComplaintModel,
    PriorityRequest,
    PriorityResponse,
    StatusUpdateRequest,
)
from ...services import complaints as complaint_service
from ...services.geospatial import validate_coordinate
from ..deps import get_principal, require_roles
from ..errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/complaints", tags=["complaints"])


@router.post("", response_model=ComplaintModel, status_code=status.HTTP_200_OK)
def submit_complaint(
    payload: ComplaintCreateRequest,
    principal: Principal = Depends(require_roles("citizen")),
) -> ComplaintModel:
    try:
        location = None
        if payload.location:
            location = validate_coordinate(payload.location.lat, payload.location.lng)
            location.address = payload.location.address
        complaint = complaint_service.submit_complaint(
            citizen_id=principal.id,
            description=payload.description,
            location=location,
            photo_url=payload.photo_url,
        )
        return ComplaintModel.from_domain(complaint)
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error submitting complaint: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit complaint",
        ) from exc


@router.post("/priority", response_model=PriorityResponse, status_code=status.HTTP_200_OK)
def preview_priority(
    payload: PriorityRequest,
    _: Principal = Depends(require_roles("admin")),
) -> PriorityResponse:
    """Score a description/location pair without filing a complaint."""
    try:
        location = payload.location.to_coordinate() if payload.location else None
        return PriorityResponse(priority_score=complaint_service.compute_priority(payload.description, location))
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.get("", response_model=List[ComplaintModel], status_code=status.HTTP_200_OK)
def list_complaints(_: Principal = Depends(require_roles("admin"))) -> List[ComplaintModel]:
    try:
        return [ComplaintModel.from_domain(c) for c in complaint_service.list_complaints()]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.get("/prioritized", response_model=List[ComplaintModel], status_code=status.HTTP_200_OK)
def list_prioritized(_: Principal = Depends(require_roles("admin"))) -> List[ComplaintModel]:
    """Complaints by priority score (highest first), oldest first within a score."""
    try:
        return [ComplaintModel.from_domain(c) for c in complaint_service.list_prioritized()]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.get("/mine", response_model=List[ComplaintModel], status_code=status.HTTP_200_OK)
def list_mine(principal: Principal = Depends(get_principal)) -> List[ComplaintModel]:
    try:
        return [ComplaintModel.from_domain(c) for c in complaint_service.list_for_user(principal)]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.put("/{complaint_id}/status", response_model=ComplaintModel, status_code=status.HTTP_200_OK)
def update_status(
    complaint_id: str,
    payload: StatusUpdateRequest,
    _: Principal = Depends(require_roles("admin")),
) -> ComplaintModel:
    try:
        complaint = complaint_service.update_complaint_status(
            complaint_id,
            status=payload.status,
            assigned_to=payload.assigned_to,
        )
        return ComplaintModel.from_domain(complaint)
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error updating complaint {complaint_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update complaint: {str(exc)}",
        ) from exc
