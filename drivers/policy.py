"""
Purpose: Central configuration for fleet maintenance alerts.
What it does:

Stores the tunable threshold for "service due soon":

ALERT_THRESHOLD_KM = 500

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class MaintenancePolicy:
    """
    Central configuration for maintenance warnings.
    """

    # Warn once the truck is this close (km) to its next scheduled service.
    # Past the scheduled mileage the alert becomes urgent regardless.
    alert_threshold_km: int = 500

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.alert_threshold_km < 0:
            raise ValueError("alert_threshold_km must be >= 0")


def default_maintenance_policy() -> MaintenancePolicy:
    """
    Convenience factory for the default policy.
    """
    p = MaintenancePolicy()
    p.validate()
    return p
