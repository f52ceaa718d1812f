import logging
import uuid
from django.apps import apps
from django.utils import timezone
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView, exception_handler

from company.models import AdminUser, CompanySettings
from drivers.models import Driver
from routing.eta_service import route_polyline, trip_summary
from routing.geo import Coordinates
from routing.nominatim_client import GeocodingError
from routing.route_service import optimize_route
from shipments.fleet import fleet_overview
from shipments.lifecycle import ShipmentStateException, mark_delivered, record_ping, start_trip, stop_trip
from shipments.models import Company, ProofOfDelivery, Shipment
from storage.repository import DuplicateDriverError, normalize_code
from storage.supabase_client import SupabaseError

from .serializers import (
    AdminUserSerializer,
    CompanySettingsSerializer,
    DriverLoginSerializer,
    DriverSerializer,
    GeocodeSerializer,
    PingSerializer,
    ProofOfDeliverySerializer,
    ShipmentSerializer,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Não existe cadastro com a numeração informada."


class TrackingServicesMixin:
    """
    Gives views the repository and geocoder built once in TrackingConfig.ready().
    Both can be overridden per view with as_view(repository=..., geocoder=...).
    """
    repository = None
    geocoder = None

    def get_repository(self):
        return self.repository or apps.get_app_config("tracking").repository

    def get_geocoder(self):
        return self.geocoder or apps.get_app_config("tracking").geocoder

    def get_shipment_or_404(self, code):
        shipment = self.get_repository().get_shipment(code)
        if shipment is None:
            return None, Response({"error": NOT_FOUND_MESSAGE}, status=status.HTTP_404_NOT_FOUND)
        return shipment, None


def summary_payload(shipment):
    summary = trip_summary(shipment)
    route = route_polyline(
        shipment.current_location.coordinates,
        shipment.stops,
        shipment.destination_coordinates,
    )
    return {
        "progress": summary.progress,
        "remainingKm": summary.remaining_km,
        "heading": summary.heading,
        "nextTarget": summary.next_target.to_dict() if summary.next_target else None,
        "route": [point.to_dict() for point in route],
    }


def tracking_payload(shipment):
    return {
        "shipment": shipment.to_dict(),
        "statusLabel": shipment.status.label,
        "summary": summary_payload(shipment),
    }


class TrackView(TrackingServicesMixin, APIView):
    """
    Public tracking page data: the shipment plus progress, km left and marker heading.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, code):
        shipment, error = self.get_shipment_or_404(code)
        if error:
            return error
        return Response(tracking_payload(shipment))


class CompanySettingsView(TrackingServicesMixin, APIView):
    """
    Branding is public (the tracking page needs it); changing it is admin only.
    """

    def get_permissions(self):
        if self.request.method in permissions.SAFE_METHODS:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get(self, request):
        return Response(self.get_repository().company_settings().to_dict())

    def put(self, request):
        serializer = CompanySettingsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        repository = self.get_repository()
        merged = {**repository.company_settings().to_dict(), **serializer.validated_data}
        saved = repository.save_company_settings(CompanySettings.from_dict(merged))
        return Response(saved.to_dict())


class DriverTripViewSet(TrackingServicesMixin, viewsets.ViewSet):
    """
    Driver panel: open a trip by code or phone, start/stop live tracking,
    send GPS pings and close the delivery.
    """
    permission_classes = [permissions.AllowAny]
    lookup_field = "code"

    @action(detail=False, methods=["post"])
    def login(self, request):
        serializer = DriverLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        repository = self.get_repository()
        code = serializer.validated_data.get("code")
        if code:
            shipment = repository.get_shipment(code)
        else:
            shipment = repository.shipment_for_driver_phone(serializer.validated_data["phone"])

        if shipment is None:
            return Response({"error": "Viagem não encontrada."}, status=status.HTTP_404_NOT_FOUND)
        return Response(tracking_payload(shipment))

    def _transition(self, code, transition, *args):
        shipment, error = self.get_shipment_or_404(code)
        if error:
            return error
        try:
            # last_update is shown in the company's TIME_ZONE, not the host's
            updated = transition(shipment, *args, now=timezone.localtime())
        except ShipmentStateException as exc:
            return Response({"error": str(exc)}, status=status.HTTP_409_CONFLICT)

        self.get_repository().save_shipment(updated)
        return Response(tracking_payload(updated))

    @action(detail=True, methods=["post"])
    def start(self, request, code=None):
        return self._transition(code, start_trip)

    @action(detail=True, methods=["post"])
    def stop(self, request, code=None):
        return self._transition(code, stop_trip)

    @action(detail=True, methods=["post"])
    def ping(self, request, code=None):
        serializer = PingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        position = Coordinates(serializer.validated_data["lat"], serializer.validated_data["lng"])

        address = None
        if serializer.validated_data["reverseGeocode"]:
            try:
                address = self.get_geocoder().reverse(position)
            except GeocodingError as exc:
                # keep the last known address; the position still updates
                logger.warning("Reverse geocoding failed for %s: %s", code, exc)

        return self._transition(code, record_ping, position, address)

    @action(detail=True, methods=["post"])
    def deliver(self, request, code=None):
        serializer = ProofOfDeliverySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        data["timestamp"] = data.get("timestamp") or timezone.localtime().isoformat(timespec="seconds")
        return self._transition(code, mark_delivered, ProofOfDelivery.from_dict(data))


class ShipmentViewSet(TrackingServicesMixin, viewsets.ViewSet):
    """
    Admin CRUD for shipments.
    - Create without a code to get a fresh RODOVAR####/AXD#### one.
    - optimize-route reorders the stops from the trip origin.
    """
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = "code"

    def list(self, request):
        shipments = self.get_repository().all_shipments()
        return Response([shipments[code].to_dict() for code in sorted(shipments)])

    def retrieve(self, request, code=None):
        shipment, error = self.get_shipment_or_404(code)
        if error:
            return error
        return Response(tracking_payload(shipment))

    def create(self, request):
        serializer = ShipmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        repository = self.get_repository()
        data = dict(serializer.validated_data)
        code = normalize_code(data.get("code"))
        if not code:
            code = repository.generate_code(Company(data["company"]))
        elif repository.get_shipment(code) is not None:
            return Response({"error": f"Shipment {code} already exists"}, status=status.HTTP_409_CONFLICT)
        data["code"] = code

        shipment = repository.save_shipment(Shipment.from_dict(data))
        return Response(shipment.to_dict(), status=status.HTTP_201_CREATED)

    def update(self, request, code=None):
        return self._save(request, code, partial=False)

    def partial_update(self, request, code=None):
        return self._save(request, code, partial=True)

    def _save(self, request, code, partial):
        existing, error = self.get_shipment_or_404(code)
        if error:
            return error

        serializer = ShipmentSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = existing.to_dict()
        if not partial:
            # a full update replaces what the form edits; proof of delivery,
            # progress, driver photo and unknown keys stay as stored
            for name in serializer.fields:
                data.pop(name, None)
        data.update(serializer.validated_data)
        data["code"] = existing.code

        shipment = self.get_repository().save_shipment(Shipment.from_dict(data))
        return Response(shipment.to_dict())

    def destroy(self, request, code=None):
        self.get_repository().delete_shipment(code)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="optimize-route")
    def reorder_stops(self, request, code=None):
        shipment, error = self.get_shipment_or_404(code)
        if error:
            return error

        start = shipment.origin_coordinates
        if start.is_unset():
            start = shipment.current_location.coordinates

        shipment.stops = optimize_route(start, shipment.stops)
        self.get_repository().save_shipment(shipment)
        return Response(tracking_payload(shipment))


class DriverViewSet(TrackingServicesMixin, viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    def list(self, request):
        drivers = sorted(self.get_repository().all_drivers(), key=lambda d: d.name.lower())
        return Response([driver.to_dict() for driver in drivers])

    def create(self, request):
        return self._save(request, None, status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        return self._save(request, pk, status.HTTP_200_OK)

    def _save(self, request, driver_id, success_status):
        serializer = DriverSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        data["id"] = driver_id or data.get("id") or uuid.uuid4().hex[:12]
        try:
            driver = self.get_repository().save_driver(Driver.from_dict(data))
        except DuplicateDriverError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(driver.to_dict(), status=success_status)

    def destroy(self, request, pk=None):
        self.get_repository().delete_driver(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserViewSet(TrackingServicesMixin, viewsets.ViewSet):
    """
    Back-office user metadata (role, e-mail). Passwords are not handled here.
    """
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = "username"

    def list(self, request):
        return Response([user.to_dict() for user in self.get_repository().all_users()])

    def create(self, request):
        serializer = AdminUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = self.get_repository().save_user(AdminUser.from_dict(serializer.validated_data))
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(user.to_dict(), status=status.HTTP_201_CREATED)

    def destroy(self, request, username=None):
        self.get_repository().delete_user(username)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def role(self, request):
        email = request.query_params.get("email") or getattr(request.user, "email", "")
        return Response({"email": email, "role": self.get_repository().user_role(email).value})


class FleetView(TrackingServicesMixin, APIView):
    """All trucks still on the road, for the admin map."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        markers = fleet_overview(self.get_repository().all_shipments().values())
        return Response([
            {
                "code": marker.code,
                "driverName": marker.driver_name,
                "company": marker.company.value,
                "position": marker.position.to_dict(),
                "destination": marker.destination,
                "status": marker.status.value,
                "statusLabel": marker.status_label,
                "line": [point.to_dict() for point in marker.line],
            }
            for marker in markers
        ])


class MaintenanceView(TrackingServicesMixin, APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        alerts = self.get_repository().fleet_maintenance_alerts()
        return Response([
            {
                "severity": alert.severity.value,
                "driverId": alert.driver_id,
                "vehicle": alert.vehicle,
                "kmToService": alert.km_to_service,
                "message": alert.message,
            }
            for alert in alerts
        ])


class GeocodeView(TrackingServicesMixin, APIView):
    """
    Lookup used by the admin form to place origin, destination and stops.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = GeocodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        geocoder = self.get_geocoder()
        if data.get("place"):
            found = geocoder.coordinates_for_place(data["place"], data.get("detailedAddress"))
        else:
            found = geocoder.coordinates_for_city(data["city"], data["state"])

        return Response({"coordinates": found.to_dict(), "found": not found.is_unset()})


def storage_unavailable_handler(exc, context):
    """
    DRF exception handler: cloud write failures become 503 instead of a 500 page.
    """
    if isinstance(exc, SupabaseError):
        logger.error("Storage write failed: %s", exc)
        return Response({"error": "Armazenamento indisponível, tente novamente."}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return exception_handler(exc, context)
