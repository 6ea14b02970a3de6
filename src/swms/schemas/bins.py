"""Bin request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from ..models.domain import Bin
from .common import CamelModel, LocationModel


class BinCreateRequest(CamelModel):
    name: str
    location: Optional[LocationModel] = None
    fill_level: Any = Field(default=0, alias="fillLevel")


class SensorReport(CamelModel):
    # Type-checked by the bin service so non-numbers surface as invalid input
    fill_level: Any = Field(default=None, alias="fillLevel")


class BinModel(CamelModel):
    id: str
    name: str
    location: Optional[LocationModel] = None
    fill_level: int = Field(alias="fillLevel")
    status: str
    sensor_last_seen: Optional[datetime] = Field(default=None, alias="sensorLastSeen")
    last_collected_at: Optional[datetime] = Field(default=None, alias="lastCollectedAt")

    @classmethod
    def from_domain(cls, bin_: Bin) -> "BinModel":
        return cls(
            id=bin_.id,
            name=bin_.name,
            location=LocationModel.from_coordinate(bin_.location),
            fill_level=bin_.fill_level,
            status=bin_.status,
            sensor_last_seen=bin_.sensor_last_seen,
            last_collected_at=bin_.last_collected_at,
        )
