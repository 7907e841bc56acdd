"""Device auth service - resolve a device token to the actor it proxies."""

import structlog

from core.domain.actors import DeviceActor
from core.domain.errors import InvalidInputError
from core.domain.value_objects import DeviceId, UserId
from core.providers import Clock
from devices.domain.errors import DeviceNotFoundError
from devices.domain.tokens import hash_token
from devices.stores.interfaces import DeviceStore

logger = structlog.get_logger(__name__)


class DeviceAuthService:
    """Service for device token authentication and revocation."""

    def __init__(self, store: DeviceStore, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    def authenticate(self, raw_token: str) -> DeviceActor | None:
        """Return the DeviceActor for *raw_token*, or None if unknown or revoked.

        Raises:
            InvalidInputError: If the token is blank.
        """
        if not raw_token or not raw_token.strip():
            raise InvalidInputError("Device token is required.")

        device = self._store.find_by_token_hash(hash_token(raw_token.strip()))
        if device is None or device.is_revoked:
            return None

        try:
            self._store.touch(device.id, self._clock.now())
        except Exception:
            # last_seen_at is informational; authentication already succeeded.
            logger.warning("device.touch_failed", device_id=str(device.id), exc_info=True)

        return DeviceActor(user_id=device.user_id, device_id=device.id)

    def revoke(self, user_id: UserId, device_id: DeviceId) -> None:
        """Revoke one of *user_id*'s devices. Revoking twice is a no-op.

        Raises:
            DeviceNotFoundError: If the device is missing or not the user's.
        """
        device = self._store.find_by_id(device_id)
        if device is None or device.user_id != user_id:
            raise DeviceNotFoundError()
        if device.is_revoked:
            return
        self._store.revoke(device_id, self._clock.now())
        logger.info("device.revoked", device_id=str(device_id), user_id=str(user_id))
