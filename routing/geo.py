"""
Purpose: Great-circle math for shipment tracking.
What it does:
- haversine distance in kilometers between two points
- initial compass bearing (used to rotate the truck marker)
- straight-line progress estimate from origin to destination

Rule: Pure functions only. No storage, no HTTP, no Django.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

EARTH_RADIUS_KM = 6371.0

# origin and destination closer than this count as the same place
COINCIDENT_TRIP_KM = 0.1


@dataclass(frozen=True)
class Coordinates:
    """
    A (lat, lng) pair in decimal degrees (WGS84).

    (0, 0) is the "unknown / not set yet" sentinel used across the app,
    see `is_unset`.
    """
    lat: float
    lng: float

    def is_unset(self) -> bool:
        return self.lat == 0 and self.lng == 0

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Coordinates:
        if not data:
            return UNSET
        return cls(lat=float(data.get("lat", 0) or 0), lng=float(data.get("lng", 0) or 0))


UNSET = Coordinates(0.0, 0.0)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Distance in km along the surface of a spherical Earth (R = 6371 km).

    No range validation; (0, 0) is treated like any other point here.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # rounding can push near-antipodal pairs just past 1
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinates, b: Coordinates) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def bearing_degrees(start: Coordinates, destination: Coordinates) -> Optional[float]:
    """
    Initial bearing from start toward destination, clockwise from north, in [0, 360).

    Returns None when both points are the same: there is no direction to
    point at, and callers decide what a marker should show in that case.
    """
    if start == destination:
        return None

    start_lat = math.radians(start.lat)
    dest_lat = math.radians(destination.lat)
    d_lon = math.radians(destination.lng - start.lng)

    y = math.sin(d_lon) * math.cos(dest_lat)
    x = math.cos(start_lat) * math.sin(dest_lat) - math.sin(start_lat) * math.cos(dest_lat) * math.cos(d_lon)

    bearing = (math.degrees(math.atan2(y, x)) + 360) % 360
    # -0.0 and float rounding can land exactly on 360
    return 0.0 if bearing >= 360 else bearing


def progress_percentage(origin: Coordinates, destination: Coordinates, current: Coordinates) -> int:
    """
    Integer trip completion in [0, 100], measured as straight-line closeness
    to the destination.

    - unset origin or destination -> 0
    - origin and destination within 0.1 km -> 100
    - otherwise round((1 - remaining / total) * 100), clamped

    This is not progress along the road: a truck moving away from the
    straight line (around a stop, say) can see the value go down.
    """
    if origin.is_unset() or destination.is_unset():
        return 0

    total = distance_km(origin, destination)
    if total <= COINCIDENT_TRIP_KM:
        return 100

    remaining = distance_km(current, destination)
    percentage = (1 - remaining / total) * 100
    percentage = min(max(percentage, 0.0), 100.0)
    # half-up, not banker's rounding
    return int(math.floor(percentage + 0.5))
