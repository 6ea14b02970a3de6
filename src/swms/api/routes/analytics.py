"""Analytics endpoints for administrators."""

from __future__ import annotations

import logging
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...errors import SWMSError
from ...schemas.engagement import AreaCount, PatternsResponse, StaffEfficiencyModel
from ...services import analytics as analytics_service
from ...services.outputs.formatter import rows_to_csv, rows_to_xlsx
from ..deps import require_roles
from ..errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"], dependencies=[Depends(require_roles("admin"))])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/patterns", response_model=PatternsResponse, status_code=status.HTTP_200_OK)
def patterns(days: int = Query(default=14, ge=1, le=365)) -> PatternsResponse:
    """Daily complaint counts and bin alerts over a rolling window."""
    try:
        return PatternsResponse.model_validate(analytics_service.waste_patterns(days))
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.get("/recurring-areas", response_model=List[AreaCount], status_code=status.HTTP_200_OK)
def recurring_areas(limit: int = Query(default=10, ge=1, le=100)) -> List[AreaCount]:
    try:
        return [AreaCount(**entry) for entry in analytics_service.recurring_areas(limit)]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.get("/staff-efficiency", response_model=List[StaffEfficiencyModel], status_code=status.HTTP_200_OK)
def staff_efficiency(days: int = Query(default=30, ge=1, le=365)) -> List[StaffEfficiencyModel]:
    try:
        return [StaffEfficiencyModel(**entry) for entry in analytics_service.staff_efficiency(days)]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.get("/export", status_code=status.HTTP_200_OK)
def export(
    type: Literal["complaints", "tasks"] = Query(default="complaints", description="Dataset to export"),
    format: Literal["csv", "xlsx"] = Query(default="csv", description="File format"),
) -> Response:
    try:
        header, rows = analytics_service.export_rows(type)
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error exporting {type}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export {type}: {str(exc)}",
        ) from exc

    if format == "xlsx":
        content: str | bytes = rows_to_xlsx(header, rows, title=type)
        media_type = XLSX_MEDIA_TYPE
    else:
        content = rows_to_csv(header, rows)
        media_type = "text/csv"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{type}.{format}"'},
    )
