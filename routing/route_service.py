#Purpose: Stop sequencing for a shipment route.
#Takes the stops an admin typed in (in any order) and lays them out
#as a visiting sequence starting from the trip origin.
#Greedy nearest-neighbour: good enough for the handful of stops a truck
#makes, not an optimal TSP tour.

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Sequence

from .geo import Coordinates, distance_km


@dataclass(frozen=True)
class RouteStop:
    """
    An intermediate stop on a shipment route.
    `order` is the 1-based position in the route; city/address are display only.
    """
    coordinates: Coordinates
    order: int = 0
    city: str = ""
    address: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "address": self.address,
            "coordinates": self.coordinates.to_dict(),
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RouteStop:
        return cls(
            coordinates=Coordinates.from_dict(data.get("coordinates")),
            order=int(data.get("order") or 0),
            city=data.get("city") or "",
            address=data.get("address") or "",
        )


def optimize_route(origin: Coordinates, stops: Sequence[RouteStop]) -> List[RouteStop]:
    """
    Reorder stops into a nearest-neighbour visiting sequence from `origin`.

    Returns new RouteStop objects with `order` rewritten to 1..n.
    When two stops are exactly as close, the one earlier in `stops` wins;
    that tie-break is an implementation detail, not a guarantee.

    O(n^2) in the number of stops.
    """
    remaining = list(stops)
    sequence: List[RouteStop] = []
    current = origin

    while remaining:
        nearest_index = 0
        nearest_km = float("inf")
        for index, stop in enumerate(remaining):
            km = distance_km(current, stop.coordinates)
            if km < nearest_km:
                nearest_km = km
                nearest_index = index

        next_stop = remaining.pop(nearest_index)
        sequence.append(next_stop)
        current = next_stop.coordinates

    return [replace(stop, order=position) for position, stop in enumerate(sequence, start=1)]
