from dataclasses import replace
from datetime import datetime
import logging
from typing import Optional

from routing.geo import Coordinates, progress_percentage
from routing.nominatim_client import ReverseGeocodeResult
from .models import Location, ProofOfDelivery, Shipment, TrackingStatus

logger = logging.getLogger(__name__)

MOVING_STATUSES = (TrackingStatus.IN_TRANSIT, TrackingStatus.DELAYED)


class ShipmentStateException(Exception):
    """Raised when an invalid shipment transition is attempted."""
    pass


def format_last_update(now: Optional[datetime] = None) -> str:
    """'HH:MM - DD/MM', the format shown under the map."""
    now = now or datetime.now()
    return now.strftime("%H:%M - %d/%m")


def start_trip(shipment: Shipment, now: Optional[datetime] = None) -> Shipment:
    """
    Called when the driver taps "Iniciar viagem".
    The shipment goes live and customers start seeing position updates.
    """
    if shipment.is_delivered:
        raise ShipmentStateException(f"Cannot start shipment {shipment.code}: already delivered")

    logger.info("Trip started for %s", shipment.code)
    return replace(
        shipment,
        status=TrackingStatus.IN_TRANSIT,
        is_live=True,
        last_update=format_last_update(now),
    )


def stop_trip(shipment: Shipment, now: Optional[datetime] = None) -> Shipment:
    """
    Called when the driver stops live tracking (rest, overnight, breakdown).
    """
    if shipment.status not in MOVING_STATUSES:
        raise ShipmentStateException(f"Cannot stop shipment {shipment.code} from {shipment.status.value}")

    logger.info("Trip stopped for %s", shipment.code)
    return replace(
        shipment,
        status=TrackingStatus.STOPPED,
        is_live=False,
        last_update=format_last_update(now),
    )


def record_ping(
    shipment: Shipment,
    coordinates: Coordinates,
    address: Optional[ReverseGeocodeResult] = None,
    now: Optional[datetime] = None,
) -> Shipment:
    """
    Apply one GPS reading from the driver's phone.

    When a reverse-geocoded address is given, city/state/street are refreshed
    too; otherwise the previous ones are kept. Progress is recomputed.
    """
    if shipment.is_delivered:
        raise ShipmentStateException(f"Shipment {shipment.code} is delivered; pings are no longer accepted")

    previous = shipment.current_location
    location = Location(
        city=previous.city,
        state=previous.state,
        address=previous.address,
        coordinates=coordinates,
    )
    if address is not None:
        location = Location(
            city=address.city or previous.city,
            state=(address.state or previous.state).upper(),
            address=address.road or previous.address,
            coordinates=coordinates,
        )

    return replace(
        shipment,
        current_location=location,
        last_update=format_last_update(now),
        progress=progress_percentage(shipment.origin_coordinates, shipment.destination_coordinates, coordinates),
    )


def mark_delivered(shipment: Shipment, proof: ProofOfDelivery, now: Optional[datetime] = None) -> Shipment:
    """
    Close the shipment with the receiver's details. Terminal state.
    """
    if shipment.is_delivered:
        raise ShipmentStateException(f"Shipment {shipment.code} was already delivered")

    logger.info("Shipment %s delivered to %s", shipment.code, proof.receiver_name)
    return replace(
        shipment,
        status=TrackingStatus.DELIVERED,
        is_live=False,
        progress=100,
        proof_of_delivery=proof,
        last_update=format_last_update(now),
    )
