"""
Load the demo CSVs into the configured storage backend (Supabase or local JSON).

Does nothing when shipments already exist, unless --force is given.
"""
import argparse
import os

import pandas as pd

from drivers.models import Driver
from routing.geo import Coordinates, progress_percentage
from shipments.lifecycle import format_last_update
from shipments.models import Company, Location, Shipment, TrackingStatus
from storage.backends import resolve_backend
from storage.repository import TrackingRepository

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def load_drivers(filepath="sampledata/demo_drivers.csv"):
    df = pd.read_csv(os.path.join(BASE_DIR, filepath))
    drivers = []
    for _, row in df.iterrows():
        drivers.append(
            Driver(
                id=str(row["driver_id"]),
                name=row["name"],
                phone=str(row["phone"]),
                vehicle_plate=row["vehicle_plate"],
                current_mileage=int(row["current_mileage"]),
                next_maintenance_mileage=int(row["next_maintenance_mileage"]),
            )
        )
    return drivers


def load_shipments(filepath="sampledata/demo_shipments.csv"):
    df = pd.read_csv(os.path.join(BASE_DIR, filepath))
    shipments = []
    for _, row in df.iterrows():
        origin = Coordinates(float(row["origin_lat"]), float(row["origin_lng"]))
        destination = Coordinates(float(row["destination_lat"]), float(row["destination_lng"]))
        current = Coordinates(float(row["current_lat"]), float(row["current_lng"]))
        status = TrackingStatus(row["status"])

        shipments.append(
            Shipment(
                code=row["code"],
                status=status,
                origin=f"{row['origin']} - {row['origin_state']}",
                destination=f"{row['destination']} - {row['destination_state']}",
                current_location=Location(
                    city=row["origin"] if status == TrackingStatus.PENDING else "",
                    state=row["origin_state"] if status == TrackingStatus.PENDING else "",
                    coordinates=current,
                ),
                origin_coordinates=origin,
                destination_coordinates=destination,
                driver_id=str(row["driver_id"]),
                driver_name=row["driver_name"],
                company=Company(row["company"]),
                is_live=status in (TrackingStatus.IN_TRANSIT, TrackingStatus.DELAYED),
                last_update=format_last_update(),
                progress=progress_percentage(origin, destination, current),
            )
        )
    return shipments


def populate(repository, force=False):
    if repository.all_shipments() and not force:
        print("Shipments already present, skipping demo data (use --force to load anyway).")
        return 0

    drivers = load_drivers()
    for driver in drivers:
        # re-running with --force updates the same ids, never duplicates
        repository.save_driver(driver)

    shipments = load_shipments()
    for shipment in shipments:
        repository.save_shipment(shipment)

    print(f"Loaded {len(drivers)} drivers and {len(shipments)} shipments ({repository.backend.mode} mode).")
    return len(shipments)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--force", action="store_true", help="load even if shipments already exist")
    args = parser.parse_args()

    populate(TrackingRepository(resolve_backend()), force=args.force)
