"""Store interfaces (repository pattern).

Stores receive token hashes, never raw tokens.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from core.domain.value_objects import DeviceId, UserId
from devices.domain.models import Device, PairingToken


class PairingTokenStore(ABC):
    """Interface for pairing code persistence."""

    @abstractmethod
    def create(self, user_id: UserId, token_hash: str, expires_at: datetime) -> PairingToken:
        """Persist an unused pairing code."""
        ...

    @abstractmethod
    def consume(self, token_hash: str, now: datetime) -> UserId | None:
        """Atomically mark a live code used and return its owner.

        Returns None when the code is unknown, already used or expired.
        Of two concurrent calls for the same code at most one gets a user.
        """
        ...


class DeviceStore(ABC):
    """Interface for device persistence."""

    @abstractmethod
    def create(
        self,
        user_id: UserId,
        token_hash: str,
        created_at: datetime,
        label: str | None = None,
        user_agent: str | None = None,
    ) -> Device:
        """Persist a newly paired device."""
        ...

    @abstractmethod
    def find_by_token_hash(self, token_hash: str) -> Device | None:
        """Return the device holding this token hash, or None."""
        ...

    @abstractmethod
    def find_by_id(self, device_id: DeviceId) -> Device | None:
        """Return a device by ID, or None if not found."""
        ...

    @abstractmethod
    def touch(self, device_id: DeviceId, seen_at: datetime) -> None:
        """Record that the device was just seen."""
        ...

    @abstractmethod
    def revoke(self, device_id: DeviceId, revoked_at: datetime) -> None:
        """Set ``revoked_at`` unless it is already set."""
        ...
