"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ...models.domain import Coordinate


@dataclass(slots=True)
class RouteStop:
    bin_id: str
    name: str
    location: Optional[Coordinate]
    fill_level: int
    sequence: int
    distance_from_prev_m: Optional[int]


@dataclass(slots=True)
class CollectionRoute:
    start: Coordinate
    stops: List[RouteStop]

    @property
    def total_distance_m(self) -> int:
        return sum(stop.distance_from_prev_m or 0 for stop in self.stops)
