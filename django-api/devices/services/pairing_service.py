"""Pairing service - exchange a short-lived code for a device credential.

Two phases, decoupled in time:
- start: a signed-in user mints a code and shows it to the device
- complete: the device trades the code, exactly once, for a device token
"""

from datetime import timedelta

import structlog

from core.domain.errors import InvalidInputError
from core.domain.value_objects import UserId
from core.providers import Clock
from devices.domain.errors import PairingCodeInvalidError
from devices.domain.models import (
    PAIRING_TTL,
    IssuedDevice,
    PairingCode,
    clean_label,
    clean_user_agent,
)
from devices.domain.tokens import hash_token, mint_secret
from devices.stores.interfaces import DeviceStore, PairingTokenStore

logger = structlog.get_logger(__name__)


class PairingService:
    """Service for the device pairing handshake."""

    def __init__(
        self,
        pairing_store: PairingTokenStore,
        device_store: DeviceStore,
        clock: Clock,
        ttl: timedelta = PAIRING_TTL,
    ) -> None:
        self._pairing_store = pairing_store
        self._device_store = device_store
        self._clock = clock
        self._ttl = ttl

    def start_pairing(self, user_id: UserId) -> PairingCode:
        """Mint a pairing code for *user_id*.

        The raw code is returned to the caller and never stored.
        """
        code = mint_secret()
        expires_at = self._clock.now() + self._ttl
        self._pairing_store.create(user_id, hash_token(code), expires_at)
        logger.info("pairing.started", user_id=str(user_id), expires_at=expires_at.isoformat())
        return PairingCode(code=code, expires_at=expires_at)

    def complete_pairing(
        self,
        code: str,
        label: str | None = None,
        user_agent: str | None = None,
    ) -> IssuedDevice:
        """Consume *code* and bind a new device to its owner.

        Raises:
            InvalidInputError: If the code is blank.
            PairingCodeInvalidError: If the code is unknown, used or expired.
        """
        code = code.strip()
        if not code:
            raise InvalidInputError("Pairing code is required.")

        now = self._clock.now()
        user_id = self._pairing_store.consume(hash_token(code), now)
        if user_id is None:
            logger.info("pairing.rejected")
            raise PairingCodeInvalidError()

        device_token = mint_secret()
        device = self._device_store.create(
            user_id,
            hash_token(device_token),
            created_at=now,
            label=clean_label(label),
            user_agent=clean_user_agent(user_agent),
        )
        logger.info("pairing.completed", user_id=str(user_id), device_id=str(device.id))
        return IssuedDevice(device_token=device_token, user_id=user_id, device_id=device.id)
