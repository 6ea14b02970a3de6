"""Greedy nearest-neighbour ordering of collection stops.

Each step walks to the closest bin not yet visited. This is O(n^2) in the number
of bins and gives no guarantee of the shortest tour; bins needing collection
number in the tens, where the simple scan is fast enough and easy to reason about.
"""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import Bin, Coordinate
from ..geospatial import haversine_m
from .models import CollectionRoute, RouteStop


def order_stops(start: Coordinate, candidates: Sequence[Bin]) -> CollectionRoute:
    """Visit every candidate once, always moving to the nearest unvisited one.

    Ties go to the candidate that appears first in ``candidates``. Bins without a
    usable location are infinitely far away, so they end up last and report no
    leg distance.
    """

    remaining = list(candidates)
    current = start
    stops: list[RouteStop] = []

    while remaining:
        best_idx = 0
        best_dist = math.inf
        for idx, candidate in enumerate(remaining):
            distance = haversine_m(current, candidate.location)
            if distance < best_dist:
                best_idx, best_dist = idx, distance

        chosen = remaining.pop(best_idx)
        stops.append(
            RouteStop(
                bin_id=chosen.id,
                name=chosen.name,
                location=chosen.location,
                fill_level=chosen.fill_level,
                sequence=len(stops) + 1,
                distance_from_prev_m=round(best_dist) if math.isfinite(best_dist) else None,
            )
        )
        # An unlocated bin leaves the truck where it was
        if math.isfinite(best_dist):
            current = chosen.location

    return CollectionRoute(start=start, stops=stops)
