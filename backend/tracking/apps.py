import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class TrackingConfig(AppConfig):
    """
    Builds the storage backend and geocoder once per process; views pick
    them up from here instead of creating their own.
    """
    name = "tracking"
    verbose_name = "Shipment tracking"

    repository = None
    geocoder = None

    def ready(self):
        from routing.nominatim_client import NominatimClient
        from storage.backends import resolve_backend
        from storage.config import StorageSettings
        from storage.repository import TrackingRepository

        backend = resolve_backend(StorageSettings.from_env())
        self.repository = TrackingRepository(backend)
        self.geocoder = NominatimClient()
        logger.info("Tracking services ready (%s mode)", backend.mode)
