"""Bin collection routing."""

from .models import CollectionRoute, RouteStop
from .optimizer import order_stops
from .service import optimize_collection_route

__all__ = ["CollectionRoute", "RouteStop", "order_stops", "optimize_collection_route"]
