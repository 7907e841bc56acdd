"""Domain models and the ticket lifecycle.

These are pure domain objects; transitions return new instances and never
touch persistence. Django ORM models are in tickets/models.py.

Lifecycle::

    pending ──> approved ──> paid
       │
       └──────> rejected

The policy decides *who* may attempt a transition; this module decides
whether the transition is valid for the ticket's current status.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from core.domain.errors import InvalidInputError
from core.domain.value_objects import Cents, ClientId, TicketId, TicketPublicId, UserId
from tickets.domain.errors import InvalidTransitionError

MAX_MESSAGE_LENGTH = 2000
MAX_CLIENT_NAME_LENGTH = 80


class TicketStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"
    REJECTED = "rejected"


TICKET_TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    TicketStatus.PENDING: frozenset({TicketStatus.APPROVED, TicketStatus.REJECTED}),
    TicketStatus.APPROVED: frozenset({TicketStatus.PAID}),
    TicketStatus.PAID: frozenset(),
    TicketStatus.REJECTED: frozenset(),
}


@dataclass(frozen=True)
class Client:
    """Domain representation of a freelancer's client."""

    id: ClientId
    user_id: UserId
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a change request."""

    id: TicketId
    public_id: TicketPublicId
    user_id: UserId
    client_id: ClientId
    message: str
    price_cents: Cents
    status: TicketStatus
    asset_url: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class DashboardTicket:
    """Read projection of a ticket for its owner's dashboard."""

    id: TicketId
    public_id: TicketPublicId
    status: TicketStatus
    message: str
    price_cents: Cents
    asset_url: str | None
    created_at: datetime
    client_id: ClientId
    client_name: str


def create_client(*, id: ClientId, user_id: UserId, name: str, created_at: datetime) -> Client:
    trimmed = name.strip()
    if not trimmed:
        raise InvalidInputError("Client name must be non-empty.")
    if len(trimmed) > MAX_CLIENT_NAME_LENGTH:
        raise InvalidInputError("Client name too long.")
    return Client(id=id, user_id=user_id, name=trimmed, created_at=created_at)


def create_ticket(
    *,
    id: TicketId,
    public_id: TicketPublicId,
    user_id: UserId,
    client_id: ClientId,
    message: str,
    price_cents: Cents,
    now: datetime,
    asset_url: str | None = None,
) -> Ticket:
    """Build a new ticket in ``pending`` with the message frozen verbatim (trimmed)."""
    trimmed = message.strip()
    if not trimmed:
        raise InvalidInputError("Ticket message must be non-empty.")
    if len(trimmed) > MAX_MESSAGE_LENGTH:
        raise InvalidInputError("Ticket message too long.")
    return Ticket(
        id=id,
        public_id=public_id,
        user_id=user_id,
        client_id=client_id,
        message=trimmed,
        price_cents=price_cents,
        status=TicketStatus.PENDING,
        asset_url=asset_url or None,
        created_at=now,
        updated_at=now,
    )


def can_transition(current: TicketStatus, target: TicketStatus) -> bool:
    return target in TICKET_TRANSITIONS.get(current, frozenset())


def _transition(ticket: Ticket, target: TicketStatus, now: datetime, message: str) -> Ticket:
    if not can_transition(ticket.status, target):
        raise InvalidTransitionError(message)
    return replace(ticket, status=target, updated_at=now)


def approve_ticket(ticket: Ticket, now: datetime) -> Ticket:
    return _transition(ticket, TicketStatus.APPROVED, now, "Only pending tickets can be approved.")


def reject_ticket(ticket: Ticket, now: datetime) -> Ticket:
    return _transition(ticket, TicketStatus.REJECTED, now, "Only pending tickets can be rejected.")


def mark_ticket_paid(ticket: Ticket, now: datetime) -> Ticket:
    return _transition(ticket, TicketStatus.PAID, now, "Only approved tickets can be marked paid.")
