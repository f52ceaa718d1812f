"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the structure of a Driver (person + truck) without relying on Django ORM constraints.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Driver:
    """
    A registered driver and the truck they drive.
    Mileage fields feed the maintenance alerts; both are optional.
    """
    id: str
    name: str
    phone: str = ""
    vehicle_plate: Optional[str] = None
    photo_url: Optional[str] = None

    current_mileage: Optional[int] = None
    next_maintenance_mileage: Optional[int] = None

    @property
    def vehicle_label(self) -> str:
        return f"Veículo {self.vehicle_plate}" if self.vehicle_plate else self.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "vehiclePlate": self.vehicle_plate,
            "photoUrl": self.photo_url,
            "currentMileage": self.current_mileage,
            "nextMaintenanceMileage": self.next_maintenance_mileage,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Driver:
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            phone=data.get("phone") or "",
            vehicle_plate=data.get("vehiclePlate") or None,
            photo_url=data.get("photoUrl") or None,
            current_mileage=_optional_int(data.get("currentMileage")),
            next_maintenance_mileage=_optional_int(data.get("nextMaintenanceMileage")),
        )


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)
