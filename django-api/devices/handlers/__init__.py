from devices.handlers.authentication import DeviceTokenAuthentication
from devices.handlers.views import DeviceRevokeView, PairingCompleteView, PairingStartView

__all__ = [
    "DeviceRevokeView",
    "DeviceTokenAuthentication",
    "PairingCompleteView",
    "PairingStartView",
]
