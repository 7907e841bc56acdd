from devices.domain.errors import DeviceNotFoundError, PairingCodeInvalidError
from devices.domain.models import Device, IssuedDevice, PairingCode, PairingToken

__all__ = [
    "Device",
    "IssuedDevice",
    "PairingCode",
    "PairingToken",
    "DeviceNotFoundError",
    "PairingCodeInvalidError",
]
