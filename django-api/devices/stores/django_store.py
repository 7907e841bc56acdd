"""Django ORM implementation of the pairing token and device stores."""

from datetime import datetime

from django.db import transaction

from core.domain.value_objects import DeviceId, UserId
from devices import models
from devices.domain.models import Device, PairingToken
from devices.stores.interfaces import DeviceStore, PairingTokenStore


def _device_to_domain(row: models.Device) -> Device:
    return Device(
        id=DeviceId(row.id),
        user_id=UserId(row.user_id),
        label=row.label,
        user_agent=row.user_agent,
        created_at=row.created_at,
        revoked_at=row.revoked_at,
        last_seen_at=row.last_seen_at,
    )


class DjangoPairingTokenStore(PairingTokenStore):
    """Relational pairing code store using Django ORM."""

    def create(self, user_id: UserId, token_hash: str, expires_at: datetime) -> PairingToken:
        row = models.PairingToken.objects.create(
            user_id=user_id.value,
            token_hash=token_hash,
            expires_at=expires_at,
        )
        return PairingToken(user_id=UserId(row.user_id), expires_at=row.expires_at, used_at=row.used_at)

    def consume(self, token_hash: str, now: datetime) -> UserId | None:
        # The used/expired checks live in the UPDATE's WHERE clause, so
        # check-and-mark is one statement and cannot be split by a racing worker.
        with transaction.atomic():
            claimed = models.PairingToken.objects.filter(
                token_hash=token_hash,
                used_at__isnull=True,
                expires_at__gt=now,
            ).update(used_at=now)
            if claimed != 1:
                return None
            user_id = (
                models.PairingToken.objects.filter(token_hash=token_hash)
                .values_list("user_id", flat=True)
                .get()
            )
        return UserId(user_id)


class DjangoDeviceStore(DeviceStore):
    """Relational device store using Django ORM."""

    def create(
        self,
        user_id: UserId,
        token_hash: str,
        created_at: datetime,
        label: str | None = None,
        user_agent: str | None = None,
    ) -> Device:
        row = models.Device.objects.create(
            user_id=user_id.value,
            token_hash=token_hash,
            label=label,
            user_agent=user_agent,
            created_at=created_at,
        )
        return _device_to_domain(row)

    def find_by_token_hash(self, token_hash: str) -> Device | None:
        row = models.Device.objects.filter(token_hash=token_hash).first()
        return _device_to_domain(row) if row else None

    def find_by_id(self, device_id: DeviceId) -> Device | None:
        row = models.Device.objects.filter(pk=device_id.value).first()
        return _device_to_domain(row) if row else None

    def touch(self, device_id: DeviceId, seen_at: datetime) -> None:
        models.Device.objects.filter(pk=device_id.value).update(last_seen_at=seen_at)

    def revoke(self, device_id: DeviceId, revoked_at: datetime) -> None:
        models.Device.objects.filter(pk=device_id.value, revoked_at__isnull=True).update(
            revoked_at=revoked_at
        )
