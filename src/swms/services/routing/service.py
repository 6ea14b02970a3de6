"""Collection route orchestration service."""

from __future__ import annotations

import logging

from ...config import settings
from ...persistence import bins as bin_store
from ..bins import bin_from_record
from ..geospatial import validate_coordinate
from .models import CollectionRoute
from .optimizer import order_stops

logger = logging.getLogger(__name__)


def optimize_collection_route(start_lat: object, start_lng: object, threshold: int | None = None) -> CollectionRoute:
    """Order every bin at or above the fill threshold, starting from the given point.

    The start coordinate is validated before the database is touched.
    """
    start = validate_coordinate(start_lat, start_lng, label="start")
    threshold = settings.route_fill_threshold if threshold is None else threshold

    candidates = [bin_from_record(record) for record in bin_store.find_bins_above_fill_threshold(threshold)]
    route = order_stops(start, candidates)
    logger.info(
        f"Computed collection route from ({start.lat}, {start.lng}) over {len(route.stops)} bins, "
        f"{route.total_distance_m} m"
    )
    return route
