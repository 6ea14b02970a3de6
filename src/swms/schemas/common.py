"""Shared request/response building blocks."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import Coordinate


class CamelModel(BaseModel):
    """Accepts and emits camelCase field names while allowing snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True)


class LocationModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    address: Optional[str] = None

    def to_coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng, address=self.address)

    @classmethod
    def from_coordinate(cls, coordinate: Optional[Coordinate]) -> Optional["LocationModel"]:
        if coordinate is None or coordinate.lat is None or coordinate.lng is None:
            return None
        return cls(lat=coordinate.lat, lng=coordinate.lng, address=coordinate.address)
