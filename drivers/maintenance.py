"""
Purpose: Oil change / service reminders for the fleet.
What it does:
Compares each truck's odometer with its next scheduled service and
produces warnings (due soon) or urgent alerts (overdue).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from .models import Driver
from .policy import MaintenancePolicy, default_maintenance_policy


class AlertSeverity(str, Enum):
    WARNING = "warning"
    URGENT = "urgent"


@dataclass(frozen=True)
class MaintenanceAlert:
    severity: AlertSeverity
    driver_id: str
    vehicle: str
    # km left until service; negative when overdue
    km_to_service: int
    message: str


def check_fleet_maintenance(drivers: Iterable[Driver], policy: Optional[MaintenancePolicy] = None) -> List[MaintenanceAlert]:
    """
    One alert per driver whose truck is within `alert_threshold_km` of
    (or past) its next service. Drivers missing either mileage are skipped.
    """
    policy = policy or default_maintenance_policy()
    alerts: List[MaintenanceAlert] = []

    for driver in drivers:
        # 0 km means "not filled in" on the admin form
        if not driver.current_mileage or not driver.next_maintenance_mileage:
            continue

        diff = driver.next_maintenance_mileage - driver.current_mileage
        if diff > policy.alert_threshold_km:
            continue

        vehicle = driver.vehicle_label
        if diff <= 0:
            alerts.append(MaintenanceAlert(
                severity=AlertSeverity.URGENT,
                driver_id=driver.id,
                vehicle=vehicle,
                km_to_service=diff,
                message=f"URGENTE: {vehicle} excedeu a quilometragem de manutenção em {abs(diff)}km!",
            ))
        else:
            alerts.append(MaintenanceAlert(
                severity=AlertSeverity.WARNING,
                driver_id=driver.id,
                vehicle=vehicle,
                km_to_service=diff,
                message=f"ATENÇÃO: {vehicle} precisa trocar óleo/revisão em {diff}km.",
            ))

    return alerts
