#Marks routing as a package.
#Re-exports the public APIs (geo math, route sequencing, trip metrics,
#NominatimClient) so other modules import from routing without knowing internal file names.
#No business logic.

from .geo import UNSET, Coordinates, bearing_degrees, distance_km, haversine_km, progress_percentage
from .route_service import RouteStop, optimize_route
from .eta_service import TripSummary, marker_heading, next_target, remaining_km, route_polyline, trip_summary
from .nominatim_client import GeocodingError, NominatimClient, ReverseGeocodeResult

__all__ = [
    "UNSET",
    "Coordinates",
    "haversine_km",
    "distance_km",
    "bearing_degrees",
    "progress_percentage",
    "RouteStop",
    "optimize_route",
    "TripSummary",
    "remaining_km",
    "next_target",
    "marker_heading",
    "route_polyline",
    "trip_summary",
    "NominatimClient",
    "GeocodingError",
    "ReverseGeocodeResult",
]
