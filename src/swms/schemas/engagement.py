"""Eco-points, analytics and assistant schemas."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import Field

from .common import CamelModel


class EcoPointsResponse(CamelModel):
    eco_points: int = Field(alias="ecoPoints")


class LeaderboardEntry(CamelModel):
    id: str
    name: Optional[str] = None
    eco_points: int = Field(alias="ecoPoints")


class AwardRequest(CamelModel):
    user_id: Optional[str] = Field(default=None, alias="userId")
    # Checked by the engagement service so a non-integer is reported as invalid input
    points: Any = None
    reason: Optional[str] = None


class AwardResponse(CamelModel):
    user_id: str = Field(alias="userId")
    eco_points: int = Field(alias="ecoPoints")


class DailyCount(CamelModel):
    date: str
    count: int


class DailyAlerts(CamelModel):
    date: str
    alerts: int


class PatternsResponse(CamelModel):
    complaints_per_day: List[DailyCount] = Field(alias="complaintsPerDay")
    bin_alerts_per_day: List[DailyAlerts] = Field(alias="binAlertsPerDay")


class AreaCount(CamelModel):
    address: str
    count: int


class StaffEfficiencyModel(CamelModel):
    staff_id: str = Field(alias="staffId")
    name: Optional[str] = None
    completed: int
    avg_resolution_hours: Optional[float] = Field(default=None, alias="avgResolutionHours")


class ClassifyRequest(CamelModel):
    image_data: Optional[str] = Field(default=None, alias="imageData")


class ClassifyResponse(CamelModel):
    label: str
    confidence: float


class ForecastPoint(CamelModel):
    date: str
    predicted_tons: float = Field(alias="predictedTons")


class ForecastResponse(CamelModel):
    ward: str
    forecast: List[ForecastPoint]


class ChatRequest(CamelModel):
    message: Optional[str] = None


class ChatResponse(CamelModel):
    reply: str
