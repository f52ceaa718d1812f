from rest_framework import serializers

from company.models import UserRole
from shipments.models import Company, TrackingStatus


class CoordinatesSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)


class LocationSerializer(serializers.Serializer):
    city = serializers.CharField(required=False, allow_blank=True, default="")
    state = serializers.CharField(required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    coordinates = CoordinatesSerializer(required=False)


class RouteStopSerializer(serializers.Serializer):
    city = serializers.CharField(required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    coordinates = CoordinatesSerializer()
    order = serializers.IntegerField(required=False, min_value=0, default=0)


class ShipmentSerializer(serializers.Serializer):
    """
    Admin input for a shipment. Field names follow the stored camelCase
    documents so validated_data can go straight into Shipment.from_dict.
    """
    code = serializers.CharField(required=False, allow_blank=True, max_length=32)
    status = serializers.ChoiceField(choices=[s.value for s in TrackingStatus], default=TrackingStatus.PENDING.value)
    origin = serializers.CharField(required=False, allow_blank=True, default="")
    destination = serializers.CharField(required=False, allow_blank=True, default="")
    currentLocation = LocationSerializer(required=False)
    originCoordinates = CoordinatesSerializer(required=False)
    destinationCoordinates = CoordinatesSerializer(required=False)
    stops = RouteStopSerializer(many=True, required=False)
    driverId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    driverName = serializers.CharField(required=False, allow_blank=True, default="")
    company = serializers.ChoiceField(choices=[c.value for c in Company], default=Company.RODOVAR.value)
    isLive = serializers.BooleanField(required=False, default=False)
    message = serializers.CharField(required=False, allow_blank=True, default="")


class DriverLoginSerializer(serializers.Serializer):
    code = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get("code") and not attrs.get("phone"):
            raise serializers.ValidationError("Informe o código da viagem ou o telefone.")
        return attrs


class PingSerializer(CoordinatesSerializer):
    reverseGeocode = serializers.BooleanField(required=False, default=True)


class ProofOfDeliverySerializer(serializers.Serializer):
    receiverName = serializers.CharField()
    receiverDoc = serializers.CharField()
    timestamp = serializers.CharField(required=False, allow_blank=True)
    photoUrl = serializers.URLField(required=False, allow_null=True)
    signatureUrl = serializers.URLField(required=False, allow_null=True)


class DriverSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True)
    name = serializers.CharField()
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    vehiclePlate = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    photoUrl = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    currentMileage = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    nextMaintenanceMileage = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class AdminUserSerializer(serializers.Serializer):
    username = serializers.CharField()
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    role = serializers.ChoiceField(choices=[r.value for r in UserRole], default=UserRole.BASIC.value)


class CompanySettingsSerializer(serializers.Serializer):
    name = serializers.CharField(required=False)
    slogan = serializers.CharField(required=False, allow_blank=True)
    logoUrl = serializers.CharField(required=False, allow_blank=True)
    primaryColor = serializers.RegexField(r"^#[0-9A-Fa-f]{6}$", required=False)
    backgroundColor = serializers.RegexField(r"^#[0-9A-Fa-f]{6}$", required=False)
    cardColor = serializers.RegexField(r"^#[0-9A-Fa-f]{6}$", required=False)
    textColor = serializers.RegexField(r"^#[0-9A-Fa-f]{6}$", required=False)


class GeocodeSerializer(serializers.Serializer):
    city = serializers.CharField(required=False, allow_blank=True)
    state = serializers.CharField(required=False, allow_blank=True)
    place = serializers.CharField(required=False, allow_blank=True)
    detailedAddress = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        has_city = attrs.get("city") and attrs.get("state")
        if not has_city and not attrs.get("place"):
            raise serializers.ValidationError("Provide city and state, or place.")
        return attrs
