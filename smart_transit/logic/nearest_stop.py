"""Nearest-stop resolution from a device coordinate."""

from __future__ import annotations

import math
from typing import Sequence

from smart_transit.data.location import Coordinate
from smart_transit.data.models import Stop

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in km."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def resolve_nearest_stop(coordinate: Coordinate | None, stops: Sequence[Stop]) -> Stop | None:
    """Return the closest stop, the first stop without a coordinate, or None."""
    if not stops:
        return None
    if coordinate is None:
        return stops[0]

    best = stops[0]
    best_distance = haversine_km(coordinate.latitude, coordinate.longitude, best.latitude, best.longitude)
    for stop in stops[1:]:
        distance = haversine_km(coordinate.latitude, coordinate.longitude, stop.latitude, stop.longitude)
        # Strict comparison keeps the earlier stop on ties.
        if distance < best_distance:
            best = stop
            best_distance = distance
    return best


__all__ = ["EARTH_RADIUS_KM", "haversine_km", "resolve_nearest_stop"]
