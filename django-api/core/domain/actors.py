"""Actor: who is behind the current request.

Resolved per request by the identity layer and never persisted. Policies
reason only about these types, never about sessions, cookies or tokens.
"""

from dataclasses import dataclass
from typing import assert_never

from core.domain.errors import ForbiddenError
from core.domain.value_objects import DeviceId, UserId


@dataclass(frozen=True)
class UserActor:
    """A signed-in web user."""

    user_id: UserId


@dataclass(frozen=True)
class DeviceActor:
    """A paired companion device acting on behalf of its bound user."""

    user_id: UserId
    device_id: DeviceId


@dataclass(frozen=True)
class PublicActor:
    """An anonymous holder of a ticket's public link."""


@dataclass(frozen=True)
class GuestActor:
    """An unauthenticated web visitor identified by a durable cookie."""

    guest_id: str


Actor = UserActor | DeviceActor | PublicActor | GuestActor


def actor_kind(actor: Actor) -> str:
    match actor:
        case UserActor():
            return "user"
        case DeviceActor():
            return "device"
        case PublicActor():
            return "public"
        case GuestActor():
            return "guest"
        case _:
            assert_never(actor)


def acting_user_id(actor: Actor) -> UserId:
    """The user an owner-scoped request acts for; anyone else is forbidden."""
    match actor:
        case UserActor() | DeviceActor():
            return actor.user_id
        case PublicActor() | GuestActor():
            raise ForbiddenError("A signed-in user or paired device is required.")
        case _:
            assert_never(actor)
