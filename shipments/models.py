"""
Purpose: Domain models for the Shipments capability.
What it does:
- Defines core data structures:
- Shipment (tracking code, status, origin/destination, current location, stops, driver, company)
- Location (city, state, street address, coordinates)
- ProofOfDelivery (who received the cargo and when)

Defines enums/constants:
- TrackingStatus = PENDING | IN_TRANSIT | STOPPED | DELAYED | DELIVERED | EXCEPTION
- Company = RODOVAR | AXD

Converts to/from the camelCase JSON documents the storage backends hold.

Rule: No HTTP calls, no storage access. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from routing.geo import UNSET, Coordinates
from routing.route_service import RouteStop


class TrackingStatus(str, Enum):
    PENDING = "PENDING"
    IN_TRANSIT = "IN_TRANSIT"
    STOPPED = "STOPPED"
    DELAYED = "DELAYED"
    DELIVERED = "DELIVERED"
    EXCEPTION = "EXCEPTION"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    TrackingStatus.PENDING: "Aguardando Coleta",
    TrackingStatus.IN_TRANSIT: "Em Trânsito",
    TrackingStatus.STOPPED: "Parado",
    TrackingStatus.DELAYED: "Atrasado",
    TrackingStatus.DELIVERED: "Entregue",
    TrackingStatus.EXCEPTION: "Ocorrência",
}


class Company(str, Enum):
    RODOVAR = "RODOVAR"
    AXD = "AXD"


@dataclass
class Location:
    city: str = ""
    state: str = ""
    address: str = ""
    coordinates: Coordinates = UNSET

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "state": self.state,
            "address": self.address,
            "coordinates": self.coordinates.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Location:
        data = data or {}
        return cls(
            city=data.get("city") or "",
            state=data.get("state") or "",
            address=data.get("address") or "",
            coordinates=Coordinates.from_dict(data.get("coordinates")),
        )


@dataclass(frozen=True)
class ProofOfDelivery:
    receiver_name: str
    receiver_document: str
    timestamp: str
    photo_url: Optional[str] = None
    signature_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "receiverName": self.receiver_name,
            "receiverDoc": self.receiver_document,
            "timestamp": self.timestamp,
            "photoUrl": self.photo_url,
            "signatureUrl": self.signature_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ProofOfDelivery:
        return cls(
            receiver_name=data.get("receiverName") or "",
            receiver_document=data.get("receiverDoc") or "",
            timestamp=data.get("timestamp") or "",
            photo_url=data.get("photoUrl"),
            signature_url=data.get("signatureUrl"),
        )


# keys handled explicitly by Shipment.from_dict; everything else goes to `extra`
_SHIPMENT_KEYS = {
    "code", "status", "origin", "destination", "currentLocation", "originCoordinates",
    "destinationCoordinates", "stops", "driverId", "driverName", "driverPhoto", "company",
    "isLive", "lastUpdate", "progress", "message", "proofOfDelivery",
}


@dataclass
class Shipment:
    """
    A tracked load. `code` is the key customers type in to follow it.
    """

    code: str
    status: TrackingStatus = TrackingStatus.PENDING
    origin: str = ""
    destination: str = ""

    current_location: Location = field(default_factory=Location)
    origin_coordinates: Coordinates = UNSET
    destination_coordinates: Coordinates = UNSET
    stops: List[RouteStop] = field(default_factory=list)

    driver_id: Optional[str] = None
    driver_name: str = ""
    driver_photo: Optional[str] = None

    company: Company = Company.RODOVAR
    is_live: bool = False
    last_update: str = ""
    progress: int = 0
    message: str = ""
    proof_of_delivery: Optional[ProofOfDelivery] = None

    # fields written by other clients that this model does not know about
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_delivered(self) -> bool:
        return self.status == TrackingStatus.DELIVERED

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({
            "code": self.code,
            "status": self.status.value,
            "origin": self.origin,
            "destination": self.destination,
            "currentLocation": self.current_location.to_dict(),
            "originCoordinates": self.origin_coordinates.to_dict(),
            "destinationCoordinates": self.destination_coordinates.to_dict(),
            "stops": [stop.to_dict() for stop in self.stops],
            "driverId": self.driver_id,
            "driverName": self.driver_name,
            "driverPhoto": self.driver_photo,
            "company": self.company.value,
            "isLive": self.is_live,
            "lastUpdate": self.last_update,
            "progress": self.progress,
            "message": self.message,
            "proofOfDelivery": self.proof_of_delivery.to_dict() if self.proof_of_delivery else None,
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Shipment:
        proof = data.get("proofOfDelivery")
        return cls(
            code=data["code"],
            status=TrackingStatus(data.get("status") or TrackingStatus.PENDING.value),
            origin=data.get("origin") or "",
            destination=data.get("destination") or "",
            current_location=Location.from_dict(data.get("currentLocation")),
            origin_coordinates=Coordinates.from_dict(data.get("originCoordinates")),
            destination_coordinates=Coordinates.from_dict(data.get("destinationCoordinates")),
            stops=[RouteStop.from_dict(stop) for stop in data.get("stops") or []],
            driver_id=data.get("driverId") or None,
            driver_name=data.get("driverName") or "",
            driver_photo=data.get("driverPhoto") or None,
            company=Company(data.get("company") or Company.RODOVAR.value),
            is_live=bool(data.get("isLive", False)),
            last_update=data.get("lastUpdate") or "",
            progress=int(data.get("progress") or 0),
            message=data.get("message") or "",
            proof_of_delivery=ProofOfDelivery.from_dict(proof) if proof else None,
            extra={key: value for key, value in data.items() if key not in _SHIPMENT_KEYS},
        )
