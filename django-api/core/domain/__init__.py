from core.domain.actors import Actor, DeviceActor, GuestActor, PublicActor, UserActor
from core.domain.errors import DomainError, ErrorCode
from core.domain.value_objects import (
    Cents,
    ClientId,
    DeviceId,
    TicketId,
    TicketPublicId,
    UserId,
)

__all__ = [
    "Actor",
    "UserActor",
    "DeviceActor",
    "PublicActor",
    "GuestActor",
    "DomainError",
    "ErrorCode",
    "UserId",
    "ClientId",
    "TicketId",
    "TicketPublicId",
    "DeviceId",
    "Cents",
]
