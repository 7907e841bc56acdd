"""Domain models for the device pairing handshake.

Django ORM models are in devices/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from core.domain.value_objects import DeviceId, UserId

PAIRING_TTL = timedelta(minutes=10)
MAX_LABEL_LENGTH = 80
MAX_USER_AGENT_LENGTH = 512


@dataclass(frozen=True)
class PairingToken:
    """A single-use pairing code, known to storage only by its hash."""

    user_id: UserId
    expires_at: datetime
    used_at: datetime | None = None

    def is_live(self, now: datetime) -> bool:
        return self.used_at is None and now < self.expires_at


@dataclass(frozen=True)
class Device:
    """Domain representation of a paired companion device."""

    id: DeviceId
    user_id: UserId
    label: str | None
    user_agent: str | None
    created_at: datetime
    revoked_at: datetime | None = None
    last_seen_at: datetime | None = None

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None


@dataclass(frozen=True)
class PairingCode:
    """Result of starting a pairing: the raw code, shown to the user once."""

    code: str
    expires_at: datetime


@dataclass(frozen=True)
class IssuedDevice:
    """Result of completing a pairing: the raw device token, returned once."""

    device_token: str
    user_id: UserId
    device_id: DeviceId


def clean_label(label: str | None) -> str | None:
    if label is None:
        return None
    trimmed = label.strip()[:MAX_LABEL_LENGTH]
    return trimmed or None


def clean_user_agent(user_agent: str | None) -> str | None:
    if not user_agent:
        return None
    return user_agent[:MAX_USER_AGENT_LENGTH]
