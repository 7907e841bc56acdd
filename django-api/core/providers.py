"""Clock and id providers injected into services."""

import secrets
import uuid
from abc import ABC, abstractmethod
from datetime import datetime

from django.utils import timezone

from core.domain.errors import invariant
from core.domain.value_objects import ClientId, TicketId, TicketPublicId


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Return the current timezone-aware instant."""
        ...


class SystemClock(Clock):
    def now(self) -> datetime:
        current = timezone.now()
        invariant(timezone.is_aware(current), "Clock must return aware datetimes.")
        return current


class IdProvider(ABC):
    @abstractmethod
    def new_ticket_id(self) -> TicketId: ...

    @abstractmethod
    def new_ticket_public_id(self) -> TicketPublicId: ...

    @abstractmethod
    def new_client_id(self) -> ClientId: ...


class RandomIdProvider(IdProvider):
    """Random UUIDs for internal ids, 256-bit tokens for public ids."""

    def new_ticket_id(self) -> TicketId:
        return TicketId(uuid.uuid4())

    def new_ticket_public_id(self) -> TicketPublicId:
        return TicketPublicId(secrets.token_urlsafe(32))

    def new_client_id(self) -> ClientId:
        return ClientId(uuid.uuid4())
