from django.urls import path, include
from rest_framework.routers import DefaultRouter
from tracking.views import (
    CompanySettingsView,
    DriverTripViewSet,
    DriverViewSet,
    FleetView,
    GeocodeView,
    MaintenanceView,
    ShipmentViewSet,
    TrackView,
    UserViewSet,
)

router = DefaultRouter()
router.register(r'shipments', ShipmentViewSet, basename='shipment')
router.register(r'drivers', DriverViewSet, basename='driver')
router.register(r'users', UserViewSet, basename='user')
router.register(r'driver', DriverTripViewSet, basename='driver-trip')

urlpatterns = [
    path('api/v1/', include(router.urls)),
    path('api/v1/track/<str:code>/', TrackView.as_view(), name='track'),
    path('api/v1/settings/', CompanySettingsView.as_view(), name='company-settings'),
    path('api/v1/fleet/', FleetView.as_view(), name='fleet'),
    path('api/v1/maintenance/', MaintenanceView.as_view(), name='maintenance'),
    path('api/v1/geocode/', GeocodeView.as_view(), name='geocode'),
]
