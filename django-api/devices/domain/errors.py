"""Domain errors raised by the devices module."""

from core.domain.errors import NotFoundError


class PairingCodeInvalidError(NotFoundError):
    """Raised for a pairing code that is unknown, already used or expired.

    The three causes share one message so callers cannot tell them apart.
    """

    def __init__(self) -> None:
        super().__init__("Invalid or expired pairing code.")


class DeviceNotFoundError(NotFoundError):
    """Raised when a device does not exist or belongs to someone else."""

    def __init__(self) -> None:
        super().__init__("Device not found.")
