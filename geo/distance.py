from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_MILES = 3959.0


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


def distance_miles(p1: Coordinate, p2: Coordinate) -> float:
    """
    Great-circle (haversine) distance between two points, in miles.
    """
    lat1, lat2 = math.radians(p1.lat), math.radians(p2.lat)
    d_lat = lat2 - lat1
    d_lng = math.radians(p2.lng - p1.lng)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # rounding can push `a` a hair past 1 for antipodal points
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(a))
