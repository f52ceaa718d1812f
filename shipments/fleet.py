"""
Purpose: Fleet-wide view for the admin "mapa avançado".
What it does:
Filters out delivered loads and builds one marker per active truck,
with the dashed straight line to its destination when that is known.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from routing.geo import Coordinates
from .models import Company, Shipment, TrackingStatus


@dataclass(frozen=True)
class FleetMarker:
    code: str
    driver_name: str
    company: Company
    position: Coordinates
    destination: str
    status: TrackingStatus
    line: List[Coordinates] = field(default_factory=list)

    @property
    def status_label(self) -> str:
        return self.status.label


def active_shipments(shipments: Iterable[Shipment]) -> List[Shipment]:
    return [shipment for shipment in shipments if not shipment.is_delivered]


def fleet_overview(shipments: Iterable[Shipment]) -> List[FleetMarker]:
    markers: List[FleetMarker] = []
    for shipment in active_shipments(shipments):
        position = shipment.current_location.coordinates
        destination = shipment.destination_coordinates

        line: List[Coordinates] = []
        if not destination.is_unset():
            line = [position, destination]

        markers.append(
            FleetMarker(
                code=shipment.code,
                driver_name=shipment.driver_name or "Motorista",
                company=shipment.company,
                position=position,
                destination=shipment.destination,
                status=shipment.status,
                line=line,
            )
        )
    return markers
