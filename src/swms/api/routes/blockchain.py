"""Resolution proof anchoring."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...errors import SWMSError
from ...models.domain import Principal
from ...schemas.complaints import AnchorRequest, AnchorResponse
from ...services import complaints as complaint_service
from ..deps import require_roles
from ..errors import http_error

router = APIRouter(prefix="/blockchain", tags=["blockchain"])


@router.post("/anchor-resolution", response_model=AnchorResponse, status_code=status.HTTP_200_OK)
def anchor_resolution(
    payload: AnchorRequest,
    _: Principal = Depends(require_roles("admin", "staff")),
) -> AnchorResponse:
    """Record a SHA-256 hash of the resolution proof on the complaint.

    Stands in for an on-chain anchor; only the hash and timestamp are stored.
    """
    try:
        return AnchorResponse(**complaint_service.anchor_resolution(payload.complaint_id or "", payload.proof))
    except SWMSError as exc:
        raise http_error(exc) from exc
