"""Serializers for collection routes."""

from __future__ import annotations

import csv
import io

from ..routing.models import CollectionRoute


def collection_route_to_csv(route: CollectionRoute) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "bin_id",
        "name",
        "lat",
        "lng",
        "fill_level",
        "distance_from_prev_m",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in route.stops:
        writer.writerow(
            {
                "sequence": stop.sequence,
                "bin_id": stop.bin_id,
                "name": stop.name,
                "lat": stop.location.lat if stop.location else "",
                "lng": stop.location.lng if stop.location else "",
                "fill_level": stop.fill_level,
                "distance_from_prev_m": "" if stop.distance_from_prev_m is None else stop.distance_from_prev_m,
            }
        )
    return buffer.getvalue()
