#Purpose: Customer-facing trip metrics.
#Turns the raw geo math into what the tracking page shows:
#"X% concluído", "Km faltando", where the truck arrow points,
#and the line drawn from the truck through its stops to the destination.
#Keeps the "unset coordinate" rules in one place so views don't repeat them.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

from .geo import Coordinates, bearing_degrees, distance_km, progress_percentage
from .route_service import RouteStop

if TYPE_CHECKING:
    from shipments.models import Shipment


@dataclass(frozen=True)
class TripSummary:
    progress: int
    remaining_km: Optional[int]
    heading: float
    next_target: Optional[Coordinates]


def remaining_km(current: Coordinates, destination: Coordinates) -> Optional[int]:
    """
    Straight-line km left to the destination, rounded.
    None when either end is not known yet.
    """
    if destination.is_unset() or current.is_unset():
        return None
    return int(math.floor(distance_km(current, destination) + 0.5))


def next_target(stops: Sequence[RouteStop], destination: Coordinates) -> Optional[Coordinates]:
    """The first stop still on the route, or the destination when there are none."""
    if stops:
        ordered = sorted(stops, key=lambda stop: stop.order)
        return ordered[0].coordinates
    if destination.is_unset():
        return None
    return destination


def marker_heading(current: Coordinates, stops: Sequence[RouteStop], destination: Coordinates) -> float:
    """
    Rotation for the truck marker, in degrees.
    0.0 (north) when there is nothing meaningful to point at.
    """
    target = next_target(stops, destination)
    if target is None or target.is_unset() or current.is_unset():
        return 0.0

    heading = bearing_degrees(current, target)
    return heading if heading is not None else 0.0


def route_polyline(current: Coordinates, stops: Sequence[RouteStop], destination: Coordinates) -> List[Coordinates]:
    """
    Points for the route line: truck -> stops (in route order) -> destination.
    Unset points are left out.
    """
    points = [current]
    points.extend(stop.coordinates for stop in sorted(stops, key=lambda stop: stop.order))
    points.append(destination)
    return [point for point in points if not point.is_unset()]


def trip_summary(shipment: "Shipment") -> TripSummary:
    current = shipment.current_location.coordinates
    destination = shipment.destination_coordinates

    progress = progress_percentage(shipment.origin_coordinates, destination, current)
    if shipment.is_delivered:
        # proof of delivery closes the trip wherever the last ping was
        progress = 100

    return TripSummary(
        progress=progress,
        remaining_km=remaining_km(current, destination),
        heading=marker_heading(current, shipment.stops, destination),
        next_target=next_target(shipment.stops, destination),
    )
