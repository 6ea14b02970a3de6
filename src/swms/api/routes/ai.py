"""Assistant endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ...errors import SWMSError
from ...models.domain import Principal
from ...schemas.engagement import (
    ChatRequest,
    ChatResponse,
    ClassifyRequest,
    ClassifyResponse,
    ForecastResponse,
)
from ...services import assistant
from ..deps import get_principal, require_roles
from ..errors import http_error

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/classify-waste", response_model=ClassifyResponse, status_code=status.HTTP_200_OK)
def classify_waste(payload: ClassifyRequest, _: Principal = Depends(get_principal)) -> ClassifyResponse:
    try:
        return ClassifyResponse(**assistant.classify_waste(payload.image_data))
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.get("/predict-waste-trend", response_model=ForecastResponse, status_code=status.HTTP_200_OK)
def predict_waste_trend(
    ward: str = Query(default="A", min_length=1),
    _: Principal = Depends(require_roles("admin")),
) -> ForecastResponse:
    return ForecastResponse.model_validate(assistant.predict_waste_trend(ward))


@router.post("/chat", response_model=ChatResponse, status_code=status.HTTP_200_OK)
def chat(payload: ChatRequest, _: Principal = Depends(get_principal)) -> ChatResponse:
    try:
        return ChatResponse(reply=assistant.chat(payload.message))
    except SWMSError as exc:
        raise http_error(exc) from exc
