"""
Purpose: The one place the rest of the app reads and writes records.
What it does:
- shipments: list / get / save / delete, new tracking codes, "my trip" by driver phone
- drivers: list / save (unique names) / delete, maintenance alerts
- users: back-office user metadata and role lookup
- company settings: branding, stored as the GLOBAL_SETTINGS row of the users table

It works against whichever Backend was resolved at startup and never
checks the mode itself, except to seed the default admin in local mode.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from company.models import DEFAULT_ADMIN, AdminUser, CompanySettings, UserRole
from drivers.maintenance import MaintenanceAlert, check_fleet_maintenance
from drivers.models import Driver
from drivers.policy import MaintenancePolicy, default_maintenance_policy
from drivers.selection import active_shipment_for_driver, find_driver_by_phone
from shipments.codes import generate_unique_code
from shipments.models import Company, Shipment

from .backends import Backend

logger = logging.getLogger(__name__)

SETTINGS_KEY = "GLOBAL_SETTINGS"


class DuplicateDriverError(ValueError):
    """Raised when a new driver reuses the name of an existing one."""
    pass


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


class TrackingRepository:

    def __init__(self, backend: Backend, maintenance_policy: Optional[MaintenancePolicy] = None,
                 rng: Optional[random.Random] = None):
        self.backend = backend
        self.maintenance_policy = maintenance_policy or default_maintenance_policy()
        self.rng = rng or random.Random()

        self._shipments = backend.table("shipments")
        self._drivers = backend.table("drivers")
        self._users = backend.table("users")

    # --- Shipments ---

    def all_shipments(self) -> Dict[str, Shipment]:
        return {
            code: Shipment.from_dict({"code": code, **data})
            for code, data in self._shipments.all().items()
        }

    def get_shipment(self, code: str) -> Optional[Shipment]:
        code = normalize_code(code)
        if not code:
            return None
        data = self._shipments.get(code)
        if data is None:
            return None
        return Shipment.from_dict({"code": code, **data})

    def save_shipment(self, shipment: Shipment) -> Shipment:
        """
        Upsert a shipment. The assigned driver's photo is copied onto it so
        the public tracking page can show it without a second lookup.
        """
        if shipment.driver_id:
            driver = self.get_driver(shipment.driver_id)
            if driver and driver.photo_url:
                shipment.driver_photo = driver.photo_url

        self._shipments.put(shipment.code, shipment.to_dict())
        logger.info("Saved shipment %s (%s)", shipment.code, shipment.status.value)
        return shipment

    def delete_shipment(self, code: str) -> None:
        self._shipments.delete(normalize_code(code))
        logger.info("Deleted shipment %s", code)

    def generate_code(self, company: Company = Company.RODOVAR) -> str:
        return generate_unique_code(company, self._shipments.all().keys(), rng=self.rng)

    def shipment_for_driver_phone(self, phone: str) -> Optional[Shipment]:
        driver = find_driver_by_phone(self.all_drivers(), phone)
        if driver is None:
            return None
        return active_shipment_for_driver(self.all_shipments().values(), driver.id)

    # --- Drivers ---

    def all_drivers(self) -> List[Driver]:
        return [Driver.from_dict({"id": key, **data}) for key, data in self._drivers.all().items()]

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        data = self._drivers.get(driver_id)
        if data is None:
            return None
        return Driver.from_dict({"id": driver_id, **data})

    def save_driver(self, driver: Driver) -> Driver:
        drivers = self.all_drivers()
        is_new = all(existing.id != driver.id for existing in drivers)

        if is_new and any(existing.name.lower() == driver.name.lower() for existing in drivers):
            raise DuplicateDriverError(f"A driver named {driver.name!r} already exists")

        self._drivers.put(driver.id, driver.to_dict())
        return driver

    def delete_driver(self, driver_id: str) -> None:
        self._drivers.delete(driver_id)

    def fleet_maintenance_alerts(self) -> List[MaintenanceAlert]:
        return check_fleet_maintenance(self.all_drivers(), self.maintenance_policy)

    # --- Users ---

    def all_users(self) -> List[AdminUser]:
        rows = self._users.all()
        users = [AdminUser.from_dict({"username": key, **data}) for key, data in rows.items() if key != SETTINGS_KEY]

        if not users and self.backend.mode == "local":
            # offline installs start with a single MASTER account
            self._users.put(DEFAULT_ADMIN.username, DEFAULT_ADMIN.to_dict())
            users = [DEFAULT_ADMIN]

        return users

    def save_user(self, user: AdminUser) -> AdminUser:
        if user.username == SETTINGS_KEY:
            raise ValueError(f"{SETTINGS_KEY} is a reserved username")
        self._users.put(user.username, user.to_dict())
        return user

    def delete_user(self, username: str) -> None:
        self._users.delete(username)

    def user_role(self, email: str) -> UserRole:
        """
        Role of the back-office user with this e-mail.
        Falls back to matching the part before '@' against usernames; BASIC when unknown.
        """
        users = self.all_users()
        email = (email or "").strip().lower()

        for user in users:
            if user.email and user.email.lower() == email:
                return user.role

        username = email.split("@")[0]
        for user in users:
            if user.username.lower() == username:
                return user.role

        return UserRole.BASIC

    # --- Company settings ---

    def company_settings(self) -> CompanySettings:
        return CompanySettings.from_dict(self._users.get(SETTINGS_KEY) or {})

    def save_company_settings(self, settings: CompanySettings) -> CompanySettings:
        self._users.put(SETTINGS_KEY, settings.to_dict())
        return settings
