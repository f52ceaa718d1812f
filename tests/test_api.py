from datetime import datetime, timezone as dt_timezone

import pytest
from django.contrib.auth.models import User
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIRequestFactory, force_authenticate

from drivers.models import Driver
from routing.geo import UNSET, Coordinates
from routing.nominatim_client import GeocodingError, ReverseGeocodeResult
from routing.route_service import RouteStop
from shipments.models import TrackingStatus
from storage.supabase_client import SupabaseError
from tracking.views import (
    CompanySettingsView,
    DriverTripViewSet,
    DriverViewSet,
    FleetView,
    GeocodeView,
    MaintenanceView,
    ShipmentViewSet,
    TrackView,
)

factory = APIRequestFactory()


class FakeGeocoder:
    def __init__(self, fail=False):
        self.fail = fail

    def reverse(self, coordinates):
        if self.fail:
            raise GeocodingError("Nominatim down")
        return ReverseGeocodeResult(
            road="Rodovia BR-116", neighborhood="", city="Jequié", state="ba", country="Brasil", formatted="",
        )

    def coordinates_for_city(self, city, state):
        return Coordinates(-12.9777, -38.5016)

    def coordinates_for_place(self, location, detailed_address=None):
        return UNSET


@pytest.fixture
def admin():
    # never saved; force_authenticate does not need the database
    return User(username="admin", email="admin@rodovar.com")


@pytest.fixture
def saved(repository, shipment):
    repository.save_shipment(shipment)
    return shipment


def authed(request, user):
    force_authenticate(request, user=user)
    return request


# --- public tracking ---

def test_track_shipment(repository, saved):
    view = TrackView.as_view(repository=repository)

    response = view(factory.get("/"), code="rodovar1001")

    assert response.status_code == 200
    assert response.data["shipment"]["code"] == "RODOVAR1001"
    assert response.data["statusLabel"] == "Em Trânsito"
    summary = response.data["summary"]
    assert 0 < summary["progress"] < 100
    assert summary["remainingKm"] > 0
    assert summary["nextTarget"] == saved.stops[0].coordinates.to_dict()
    assert len(summary["route"]) == 3


def test_track_unknown_code(repository):
    response = TrackView.as_view(repository=repository)(factory.get("/"), code="NOPE1234")

    assert response.status_code == 404
    assert response.data["error"] == "Não existe cadastro com a numeração informada."


def test_settings_are_public_but_changes_need_login(repository, admin):
    view = CompanySettingsView.as_view(repository=repository)

    assert view(factory.get("/")).data["primaryColor"] == "#FFD700"

    anonymous = view(factory.put("/", {"name": "AXD"}, format="json"))
    assert anonymous.status_code in (401, 403)

    response = view(authed(factory.put("/", {"name": "AXD", "primaryColor": "#00FF00"}, format="json"), admin))
    assert response.status_code == 200
    assert response.data["name"] == "AXD"
    assert response.data["slogan"] == "Logística Inteligente"
    assert repository.company_settings().primary_color == "#00FF00"

    bad = view(authed(factory.put("/", {"primaryColor": "green"}, format="json"), admin))
    assert bad.status_code == 400


# --- driver panel ---

def test_driver_login_by_code_and_phone(repository, saved):
    repository.save_driver(Driver(id="DRV-001", name="João Silva", phone="5571999202476"))
    view = DriverTripViewSet.as_view({"post": "login"}, repository=repository)

    by_code = view(factory.post("/", {"code": "rodovar1001"}, format="json"))
    by_phone = view(factory.post("/", {"phone": "(71) 99920-2476"}, format="json"))
    unknown = view(factory.post("/", {"phone": "1133334444"}, format="json"))
    empty = view(factory.post("/", {}, format="json"))

    assert by_code.data["shipment"]["code"] == "RODOVAR1001"
    assert by_phone.data["shipment"]["code"] == "RODOVAR1001"
    assert unknown.status_code == 404
    assert empty.status_code == 400


def test_driver_trip_flow(repository, saved):
    geocoder = FakeGeocoder()

    def call(action, data=None):
        view = DriverTripViewSet.as_view({"post": action}, repository=repository, geocoder=geocoder)
        return view(factory.post("/", data or {}, format="json"), code=saved.code)

    assert call("stop").data["shipment"]["status"] == "STOPPED"
    assert call("stop").status_code == 409
    assert call("start").data["shipment"]["isLive"] is True

    ping = call("ping", {"lat": -13.8575, "lng": -40.0836})
    assert ping.status_code == 200
    assert ping.data["shipment"]["currentLocation"]["city"] == "Jequié"
    assert ping.data["shipment"]["currentLocation"]["state"] == "BA"

    bad_ping = call("ping", {"lat": 120, "lng": 0})
    assert bad_ping.status_code == 400

    delivered = call("deliver", {"receiverName": "Maria", "receiverDoc": "123"})
    assert delivered.status_code == 200
    assert delivered.data["shipment"]["status"] == "DELIVERED"
    assert delivered.data["shipment"]["proofOfDelivery"]["timestamp"]
    assert delivered.data["summary"]["progress"] == 100

    assert call("ping", {"lat": -20, "lng": -45}).status_code == 409
    assert repository.get_shipment(saved.code).status == TrackingStatus.DELIVERED


def test_ping_survives_geocoder_failure(repository, saved):
    view = DriverTripViewSet.as_view({"post": "ping"}, repository=repository, geocoder=FakeGeocoder(fail=True))

    response = view(factory.post("/", {"lat": -13.8575, "lng": -40.0836}, format="json"), code=saved.code)

    assert response.status_code == 200
    location = response.data["shipment"]["currentLocation"]
    assert location["coordinates"] == {"lat": -13.8575, "lng": -40.0836}
    assert location["city"] == "Vitória da Conquista"


# --- admin ---

def test_shipment_admin_requires_login(repository):
    response = ShipmentViewSet.as_view({"get": "list"}, repository=repository)(factory.get("/"))
    assert response.status_code in (401, 403)


def test_create_shipment_generates_code(repository, admin):
    view = ShipmentViewSet.as_view({"post": "create"}, repository=repository)
    payload = {
        "company": "AXD",
        "origin": "Salvador - BA",
        "destination": "Recife - PE",
        "originCoordinates": {"lat": -12.9777, "lng": -38.5016},
        "destinationCoordinates": {"lat": -8.0476, "lng": -34.877},
    }

    response = view(authed(factory.post("/", payload, format="json"), admin))

    assert response.status_code == 201
    code = response.data["code"]
    assert code.startswith("AXD")
    assert repository.get_shipment(code).destination == "Recife - PE"

    duplicate = view(authed(factory.post("/", {**payload, "code": code.lower()}, format="json"), admin))
    assert duplicate.status_code == 409


def test_partial_update_keeps_other_fields(repository, saved, admin):
    view = ShipmentViewSet.as_view({"patch": "partial_update"}, repository=repository)

    response = view(authed(factory.patch("/", {"message": "Atraso na balsa"}, format="json"), admin), code=saved.code)

    assert response.status_code == 200
    updated = repository.get_shipment(saved.code)
    assert updated.message == "Atraso na balsa"
    assert updated.origin == saved.origin
    assert updated.stops == saved.stops


def test_list_and_delete_shipments(repository, saved, admin):
    listed = ShipmentViewSet.as_view({"get": "list"}, repository=repository)(authed(factory.get("/"), admin))
    assert [s["code"] for s in listed.data] == [saved.code]

    view = ShipmentViewSet.as_view({"delete": "destroy"}, repository=repository)
    assert view(authed(factory.delete("/"), admin), code=saved.code).status_code == 204
    assert repository.get_shipment(saved.code) is None


def test_optimize_route_reorders_stops(repository, saved, admin):
    saved.stops = [
        RouteStop(coordinates=Coordinates(-23.5505, -46.6333), order=1, city="São Paulo"),
        RouteStop(coordinates=Coordinates(-19.9167, -43.9345), order=2, city="Belo Horizonte"),
        RouteStop(coordinates=Coordinates(-12.2664, -38.9663), order=3, city="Feira de Santana"),
    ]
    repository.save_shipment(saved)
    view = ShipmentViewSet.as_view({"post": "reorder_stops"}, repository=repository)

    response = view(authed(factory.post("/"), admin), code=saved.code)

    assert response.status_code == 200
    stops = repository.get_shipment(saved.code).stops
    assert [s.city for s in stops] == ["Feira de Santana", "Belo Horizonte", "São Paulo"]
    assert [s.order for s in stops] == [1, 2, 3]


def test_driver_admin(repository, admin):
    create = DriverViewSet.as_view({"post": "create"}, repository=repository)

    first = create(authed(factory.post("/", {"name": "João Silva", "phone": "71999"}, format="json"), admin))
    duplicate = create(authed(factory.post("/", {"name": "joão silva"}, format="json"), admin))

    assert first.status_code == 201
    assert first.data["id"]
    assert duplicate.status_code == 409

    listed = DriverViewSet.as_view({"get": "list"}, repository=repository)(authed(factory.get("/"), admin))
    assert [d["name"] for d in listed.data] == ["João Silva"]


def test_fleet_and_maintenance(repository, saved, admin):
    repository.save_driver(Driver(id="DRV-001", name="João Silva", vehicle_plate="RDV1A23",
                                  current_mileage=1000, next_maintenance_mileage=900))

    fleet = FleetView.as_view(repository=repository)(authed(factory.get("/"), admin))
    assert fleet.data[0]["code"] == saved.code
    assert fleet.data[0]["statusLabel"] == "Em Trânsito"
    assert len(fleet.data[0]["line"]) == 2

    alerts = MaintenanceView.as_view(repository=repository)(authed(factory.get("/"), admin))
    assert alerts.data[0]["severity"] == "urgent"
    assert alerts.data[0]["kmToService"] == -100


def test_geocode(repository, admin):
    view = GeocodeView.as_view(repository=repository, geocoder=FakeGeocoder())

    city = view(authed(factory.post("/", {"city": "Salvador", "state": "BA"}, format="json"), admin))
    place = view(authed(factory.post("/", {"place": "Lugar nenhum"}, format="json"), admin))
    invalid = view(authed(factory.post("/", {"city": "Salvador"}, format="json"), admin))

    assert city.data == {"coordinates": {"lat": -12.9777, "lng": -38.5016}, "found": True}
    assert place.data["found"] is False
    assert invalid.status_code == 400


def test_storage_outage_returns_503(repository, admin):
    class OfflineRepository:
        def company_settings(self):
            return repository.company_settings()

        def save_company_settings(self, settings):
            raise SupabaseError("connection refused")

    view = CompanySettingsView.as_view(repository=OfflineRepository())

    response = view(authed(factory.put("/", {"name": "AXD"}, format="json"), admin))

    assert response.status_code == 503


def test_url_layout():
    assert reverse("track", kwargs={"code": "AXD1234"}) == "/api/v1/track/AXD1234/"
    assert reverse("driver-trip-login") == "/api/v1/driver/login/"
    assert reverse("driver-trip-ping", kwargs={"code": "AXD1234"}) == "/api/v1/driver/AXD1234/ping/"
    assert reverse("shipment-reorder-stops", kwargs={"code": "AXD1234"}) == "/api/v1/shipments/AXD1234/optimize-route/"
    assert reverse("user-role") == "/api/v1/users/role/"


def test_full_update_keeps_proof_of_delivery(repository, saved, admin):
    deliver = DriverTripViewSet.as_view({"post": "deliver"}, repository=repository)
    deliver(factory.post("/", {"receiverName": "Maria", "receiverDoc": "123"}, format="json"), code=saved.code)
    view = ShipmentViewSet.as_view({"put": "update"}, repository=repository)
    payload = {
        "status": "DELIVERED",
        "origin": saved.origin,
        "destination": saved.destination,
        "message": "Entregue na portaria",
    }

    response = view(authed(factory.put("/", payload, format="json"), admin), code=saved.code)

    assert response.status_code == 200
    updated = repository.get_shipment(saved.code)
    assert updated.message == "Entregue na portaria"
    assert updated.proof_of_delivery.receiver_name == "Maria"
    assert updated.progress == 100
    assert updated.last_update
    # fields the form does edit are replaced, not merged
    assert updated.stops == []


def test_last_update_uses_company_time_zone(repository, saved, monkeypatch):
    # 17:05 UTC is 14:05 in São Paulo
    monkeypatch.setattr(timezone, "now", lambda: datetime(2024, 3, 9, 17, 5, tzinfo=dt_timezone.utc))
    view = DriverTripViewSet.as_view({"post": "stop"}, repository=repository)

    response = view(factory.post("/", {}, format="json"), code=saved.code)

    assert response.data["shipment"]["lastUpdate"] == "14:05 - 09/03"
