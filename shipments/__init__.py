"""
Shipments domain package.

Public API:
- Domain models: Shipment, Location, ProofOfDelivery, TrackingStatus, Company
- Trip lifecycle: start_trip, stop_trip, record_ping, mark_delivered
- Tracking codes: generate_unique_code
- Fleet view: fleet_overview
"""
from .models import Company, Location, ProofOfDelivery, Shipment, TrackingStatus
from .lifecycle import ShipmentStateException, mark_delivered, record_ping, start_trip, stop_trip
from .codes import generate_unique_code
from .fleet import FleetMarker, active_shipments, fleet_overview

__all__ = ["Shipment",
           "Location",
             "ProofOfDelivery",
               "TrackingStatus",
               "Company",
               "ShipmentStateException",
               "start_trip",
               "stop_trip",
               "record_ping",
               "mark_delivered",
               "generate_unique_code",
               "FleetMarker",
               "active_shipments",
               "fleet_overview",
               ]
