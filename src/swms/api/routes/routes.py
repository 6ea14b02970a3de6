"""Collection routing endpoints."""

from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...errors import InvalidInputError, SWMSError
from ...models.domain import Principal
from ...schemas.routing import CollectionRouteResponse
from ...services.outputs.routing_formatter import collection_route_to_csv
from ...services.routing.service import optimize_collection_route
from ..deps import require_roles
from ..errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


def _parse_coordinate(value: Optional[str], name: str) -> float:
    if value is None or not value.strip():
        raise InvalidInputError("startLat and startLng required")
    try:
        return float(value)
    except ValueError as exc:
        raise InvalidInputError(f"{name} must be a number") from exc


@router.get(
    "/optimize",
    response_model=CollectionRouteResponse,
    status_code=status.HTTP_200_OK,
    responses={200: {"content": {"text/csv": {}}}},
)
def optimize(
    start_lat: Optional[str] = Query(default=None, alias="startLat", description="Latitude of the truck"),
    start_lng: Optional[str] = Query(default=None, alias="startLng", description="Longitude of the truck"),
    format: Literal["json", "csv"] = Query(default="json", description="Response format"),
    _: Principal = Depends(require_roles("admin", "staff")),
):
    """Order every bin that needs collection by greedy nearest-neighbour from the start point."""
    try:
        route = optimize_collection_route(_parse_coordinate(start_lat, "startLat"), _parse_coordinate(start_lng, "startLng"))
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error optimizing collection route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc

    if format == "csv":
        return Response(
            content=collection_route_to_csv(route),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="collection_route.csv"'},
        )
    return CollectionRouteResponse.from_domain(route)
