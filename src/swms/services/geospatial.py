"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Optional

from ..errors import InvalidInputError
from ..models.domain import Coordinate

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(a: Optional[Coordinate], b: Optional[Coordinate]) -> float:
    """Great-circle distance in metres between two coordinates.

    Returns ``math.inf`` when either side is missing or incomplete, so that a
    ``distance <= threshold`` check is simply False instead of an error.
    """

    if a is None or b is None:
        return math.inf
    if a.lat is None or a.lng is None or b.lat is None or b.lng is None:
        return math.inf

    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # sqrt(h) can drift past 1.0 for near-antipodal points
    c = 2 * math.asin(min(1.0, math.sqrt(h)))
    return EARTH_RADIUS_M * c


def validate_coordinate(lat: object, lng: object, *, label: str = "location") -> Coordinate:
    """Build a Coordinate from raw values, rejecting anything non-numeric or out of range."""

    for name, value in (("lat", lat), ("lng", lng)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"{label}.{name} must be a number")
        if not math.isfinite(value):
            raise InvalidInputError(f"{label}.{name} must be finite")
    if not -90.0 <= lat <= 90.0:
        raise InvalidInputError(f"{label}.lat must be within [-90, 90]")
    if not -180.0 <= lng <= 180.0:
        raise InvalidInputError(f"{label}.lng must be within [-180, 180]")
    return Coordinate(lat=float(lat), lng=float(lng))
