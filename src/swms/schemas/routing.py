"""Collection route response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from ..services.routing.models import CollectionRoute
from .common import CamelModel, LocationModel


class StartModel(CamelModel):
    lat: float
    lng: float


class RouteStopModel(CamelModel):
    id: str
    name: str
    location: Optional[LocationModel] = None
    fill_level: int = Field(alias="fillLevel")
    sequence: int
    distance_from_prev_meters: Optional[int] = Field(default=None, alias="distanceFromPrevMeters")


class CollectionRouteResponse(CamelModel):
    start: StartModel
    stops: List[RouteStopModel]
    total_distance_meters: int = Field(alias="totalDistanceMeters")

    @classmethod
    def from_domain(cls, route: CollectionRoute) -> "CollectionRouteResponse":
        return cls(
            start=StartModel(lat=route.start.lat, lng=route.start.lng),
            stops=[
                RouteStopModel(
                    id=stop.bin_id,
                    name=stop.name,
                    location=LocationModel.from_coordinate(stop.location),
                    fill_level=stop.fill_level,
                    sequence=stop.sequence,
                    distance_from_prev_meters=stop.distance_from_prev_m,
                )
                for stop in route.stops
            ],
            total_distance_meters=route.total_distance_m,
        )
