"""Bin endpoints: administration, sensor webhook and collection."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import SWMSError
from ...models.domain import Principal
from ...schemas.bins import BinCreateRequest, BinModel, SensorReport
from ...services import bins as bin_service
from ..deps import require_roles, verify_sensor_key
from ..errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bins", tags=["bins"])


@router.post("", response_model=BinModel, status_code=status.HTTP_200_OK)
def create_bin(
    payload: BinCreateRequest,
    _: Principal = Depends(require_roles("admin")),
) -> BinModel:
    try:
        location = payload.location.to_coordinate() if payload.location else None
        return BinModel.from_domain(bin_service.create_bin(payload.name, location, payload.fill_level))
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error creating bin: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create bin: {str(exc)}",
        ) from exc


@router.get("", response_model=List[BinModel], status_code=status.HTTP_200_OK)
def list_bins(_: Principal = Depends(require_roles("admin", "citizen", "staff"))) -> List[BinModel]:
    try:
        return [BinModel.from_domain(bin_) for bin_ in bin_service.list_bins()]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{bin_id}/sensor-update",
    response_model=BinModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_sensor_key)],
)
def sensor_update(bin_id: str, payload: SensorReport) -> BinModel:
    """Apply a fill-level reading from a bin's sensor."""
    try:
        return BinModel.from_domain(bin_service.report_fill_level(bin_id, payload.fill_level))
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error applying sensor update to bin {bin_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update bin: {str(exc)}",
        ) from exc


@router.post("/{bin_id}/collected", response_model=BinModel, status_code=status.HTTP_200_OK)
def mark_collected(
    bin_id: str,
    _: Principal = Depends(require_roles("admin", "staff")),
) -> BinModel:
    """Record that a bin has been emptied."""
    try:
        return BinModel.from_domain(bin_service.mark_collected(bin_id))
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error marking bin {bin_id} collected: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to mark bin collected: {str(exc)}",
        ) from exc
