#Purpose: The Nominatim (OpenStreetMap) geocoding "adapter/client".
#Sole responsibility: talk to Nominatim via HTTP and return normalized outputs.
#Encapsulates Nominatim-specific details:
#query building ("<city>, <state>, Brazil")
#URL construction (/search, /reverse)
#timeouts/error handling
#parsing response JSON into Coordinates / ReverseGeocodeResult
#It should not contain tracking rules.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

from .geo import UNSET, Coordinates

# Read Nominatim base URL from environment
# Example in .env:
# NOMINATIM_BASE_URL=https://nominatim.openstreetmap.org
load_dotenv()
BASE_URL = os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org")

# geographic centre of Brazil, used when a city cannot be found
BRAZIL_CENTROID = Coordinates(-14.2350, -51.9253)

COUNTRY = "Brazil"

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when Nominatim cannot be reached or answers with something unusable."""
    pass


@dataclass(frozen=True)
class ReverseGeocodeResult:
    road: str
    neighborhood: str
    city: str
    state: str
    country: str
    formatted: str


class NominatimClient:
    """
    Nominatim Adapter / Client

    - forward lookups are best effort: failures fall back to a default coordinate
    - reverse lookups raise GeocodingError so callers can keep the old address
    """

    def __init__(self, base_url: Optional[str] = None, timeout: int = 10, session: Any = None,
                 user_agent: str = "rodovar-tracking/1.0"):
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.timeout = timeout
        # anything with a requests-style .get() works (tests pass a fake)
        self.session = session or requests.Session()
        # Nominatim's usage policy requires an identifying User-Agent
        self.headers = {"User-Agent": user_agent}

        if not self.base_url:
            raise ValueError("Nominatim base URL not set. Please set NOMINATIM_BASE_URL in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.get(url, params=params, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise GeocodingError(f"Nominatim request to /{path} failed: {exc}") from exc

    def _search(self, query: str) -> Optional[Coordinates]:
        results: List[Dict[str, Any]] = self._get(
            "search",
            {"format": "json", "q": query, "limit": 1},
        )
        if not results:
            return None
        try:
            first = results[0]
            return Coordinates(float(first["lat"]), float(first["lon"]))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise GeocodingError(f"Unexpected Nominatim search payload for {query!r}: {exc}") from exc

    #----------------
    # Public methods
    #----------------
    def coordinates_for_city(self, city: str, state: str) -> Coordinates:
        """
        Coordinates of "<city>, <state>, Brazil".
        Falls back to the centre of Brazil so the map still has something to show.
        """
        query = f"{city.strip()}, {state.strip()}, {COUNTRY}"
        try:
            found = self._search(query)
        except GeocodingError as exc:
            logger.warning("City lookup failed for %r: %s", query, exc)
            return BRAZIL_CENTROID
        return found or BRAZIL_CENTROID

    def coordinates_for_place(self, location: str, detailed_address: Optional[str] = None) -> Coordinates:
        """
        Coordinates for a free-text place, optionally narrowed by a street address.

        If the detailed query has no hit, retries with the place alone.
        Returns UNSET (0, 0) when nothing is found or the lookup fails.
        """
        query = f"{location}, {COUNTRY}"
        if detailed_address and len(detailed_address) > 3:
            query = f"{detailed_address}, {location}, {COUNTRY}"

        try:
            found = self._search(query)
        except GeocodingError as exc:
            logger.warning("Place lookup failed for %r: %s", query, exc)
            return UNSET

        if found:
            return found
        if detailed_address:
            return self.coordinates_for_place(location)
        return UNSET

    def reverse(self, coordinates: Coordinates) -> ReverseGeocodeResult:
        """
        Street-level address for a GPS position.
        """
        data = self._get(
            "reverse",
            {
                "format": "json",
                "lat": coordinates.lat,
                "lon": coordinates.lng,
                "zoom": 18,
                "addressdetails": 1,
            },
        )

        if not data or not data.get("address"):
            raise GeocodingError(f"No address found for {coordinates.lat},{coordinates.lng}")

        address = data["address"]
        display_name = data.get("display_name") or ""
        return ReverseGeocodeResult(
            road=address.get("road") or display_name.split(",")[0].strip(),
            neighborhood=address.get("suburb") or address.get("neighbourhood") or "",
            city=address.get("city") or address.get("town") or address.get("village") or "",
            state=address.get("state") or "",
            country=address.get("country") or "",
            formatted=display_name,
        )
