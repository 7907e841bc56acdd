from django.urls import path

from devices.handlers import DeviceRevokeView, PairingCompleteView, PairingStartView

urlpatterns = [
    path("web/pairing/start", PairingStartView.as_view(), name="pairing-start"),
    path("web/devices/<str:device_id>/revoke", DeviceRevokeView.as_view(), name="device-revoke"),
    path("ext/pairing/complete", PairingCompleteView.as_view(), name="pairing-complete"),
]
