"""Domain primitives that enforce validity at creation time.

Each identifier is its own type; converting between them always goes
through an explicit constructor.
"""

import re
from dataclasses import dataclass
from typing import Self
from uuid import UUID

_PUBLIC_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{43,128}$")


@dataclass(frozen=True)
class UserId:
    """Identifier of the freelancer who owns clients, tickets and devices."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("UserId cannot be empty")
        if len(self.value) > 255:
            raise ValueError("UserId is too long")
        object.__setattr__(self, "value", self.value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ClientId:
    """Unique identifier for a Client."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TicketId:
    """Internal identifier for a Ticket. Never shown on public routes."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TicketPublicId:
    """Capability token granting public access to one ticket.

    Only values with at least 256 bits of URL-safe base64 entropy are
    accepted, so the public link stays unguessable.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _PUBLIC_ID_PATTERN.match(self.value):
            raise ValueError("Invalid ticket public id")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DeviceId:
    """Unique identifier for a paired Device."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Cents:
    """Non-negative integer amount of money in the smallest currency unit."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Cents must be an integer")
        if self.value < 0:
            raise ValueError("Cents cannot be negative")

    def __str__(self) -> str:
        return f"{self.value / 100:.2f}"
