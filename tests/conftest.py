import random

import pytest
import requests

from routing.geo import Coordinates
from routing.route_service import RouteStop
from shipments.models import Company, Location, Shipment, TrackingStatus
from storage.backends import local_backend
from storage.repository import TrackingRepository

SALVADOR = Coordinates(-12.9777, -38.5016)
FEIRA = Coordinates(-12.2664, -38.9663)
SAO_PAULO = Coordinates(-23.5505, -46.6333)
RIO = Coordinates(-22.9068, -43.1729)
BELO_HORIZONTE = Coordinates(-19.9167, -43.9345)


@pytest.fixture
def repository(tmp_path):
    return TrackingRepository(local_backend(str(tmp_path)), rng=random.Random(42))


@pytest.fixture
def shipment():
    """Salvador -> São Paulo, truck somewhere in southern Bahia, one stop in BH."""
    return Shipment(
        code="RODOVAR1001",
        status=TrackingStatus.IN_TRANSIT,
        origin="Salvador - BA",
        destination="São Paulo - SP",
        current_location=Location(city="Vitória da Conquista", state="BA", coordinates=Coordinates(-14.8615, -40.8442)),
        origin_coordinates=SALVADOR,
        destination_coordinates=SAO_PAULO,
        stops=[RouteStop(coordinates=BELO_HORIZONTE, order=1, city="Belo Horizonte")],
        driver_id="DRV-001",
        driver_name="João Silva",
        company=Company.RODOVAR,
        is_live=True,
    )


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code
        self.content = b"" if payload is None else b"x"
        self.text = "" if payload is None else str(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


@pytest.fixture
def fake_response():
    return FakeResponse
