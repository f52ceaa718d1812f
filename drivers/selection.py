"""
Purpose: Find "my trip" for a driver who logs in with a phone number.
What it does:
Matches the typed phone against registered drivers (digits only, so
"(71) 99920-2476" and "5571999202476" line up), then picks the driver's
shipment that is still on the road.
"""

import re
from typing import Iterable, Optional, TYPE_CHECKING

from .models import Driver

if TYPE_CHECKING:
    from shipments.models import Shipment

_NON_DIGITS = re.compile(r"\D")


def digits_only(phone: str) -> str:
    return _NON_DIGITS.sub("", phone or "")


def find_driver_by_phone(drivers: Iterable[Driver], phone: str) -> Optional[Driver]:
    """
    First driver whose phone contains the search digits, or is contained by them
    (so a number typed with or without country code both match).
    """
    search = digits_only(phone)
    if not search:
        return None

    for driver in drivers:
        driver_phone = digits_only(driver.phone)
        if not driver_phone:
            continue
        if search in driver_phone or driver_phone in search:
            return driver

    return None


def active_shipment_for_driver(shipments: Iterable["Shipment"], driver_id: str) -> Optional["Shipment"]:
    for shipment in shipments:
        if shipment.driver_id == driver_id and not shipment.is_delivered:
            return shipment
    return None
