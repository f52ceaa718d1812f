from .models import Driver
from .policy import MaintenancePolicy, default_maintenance_policy
from .maintenance import AlertSeverity, MaintenanceAlert, check_fleet_maintenance
from .selection import active_shipment_for_driver, find_driver_by_phone

__all__ = [
    "Driver",
    "MaintenancePolicy",
    "default_maintenance_policy",
    "AlertSeverity",
    "MaintenanceAlert",
    "check_fleet_maintenance",
    "find_driver_by_phone",
    "active_shipment_for_driver",
]
