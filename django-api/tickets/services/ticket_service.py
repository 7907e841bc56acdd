"""Ticket service - ticket lifecycle use-cases.

Services:
- Depend only on interfaces (stores) and providers
- Ask the policy before touching a ticket
- Apply transitions through the pure state machine
- Persist conditioned on the status that was read
- Return domain models or raise domain errors
"""

from collections.abc import Callable
from datetime import datetime

import structlog

from core.domain.actors import Actor, acting_user_id
from core.domain.value_objects import Cents, ClientId, TicketId, TicketPublicId
from core.providers import Clock, IdProvider
from tickets.domain.errors import ClientNotFoundError, StaleTicketError, TicketNotFoundError
from tickets.domain.models import (
    DashboardTicket,
    Ticket,
    approve_ticket,
    create_ticket,
    mark_ticket_paid,
    reject_ticket,
)
from tickets.domain.policy import TicketAction, assert_can
from tickets.stores.interfaces import ClientStore, TicketStore

logger = structlog.get_logger(__name__)

Transition = Callable[[Ticket, datetime], Ticket]


class TicketService:
    """Service for ticket lifecycle operations."""

    def __init__(
        self,
        store: TicketStore,
        client_store: ClientStore,
        clock: Clock,
        ids: IdProvider,
    ) -> None:
        self._store = store
        self._client_store = client_store
        self._clock = clock
        self._ids = ids

    def create_ticket(
        self,
        actor: Actor,
        client_id: ClientId,
        message: str,
        price_cents: Cents,
        asset_url: str | None = None,
    ) -> Ticket:
        """Create a ticket in ``pending`` for one of the actor's clients.

        Raises:
            TicketAccessDeniedError: If the actor may not create tickets.
            ClientNotFoundError: If the client is missing or not the actor's.
            InvalidInputError: If the message is empty or too long.
        """
        assert_can(actor, TicketAction.CREATE)
        user_id = acting_user_id(actor)

        client = self._client_store.find_by_id(client_id)
        if client is None or client.user_id != user_id:
            raise ClientNotFoundError()

        ticket = create_ticket(
            id=self._ids.new_ticket_id(),
            public_id=self._ids.new_ticket_public_id(),
            user_id=user_id,
            client_id=client.id,
            message=message,
            price_cents=price_cents,
            asset_url=asset_url,
            now=self._clock.now(),
        )
        created = self._store.create(ticket)
        logger.info(
            "ticket.created",
            ticket_id=str(created.id),
            user_id=str(created.user_id),
            price_cents=created.price_cents.value,
        )
        return created

    def get_ticket(self, actor: Actor, ticket_id: TicketId) -> Ticket:
        ticket = self._must_get(ticket_id)
        assert_can(actor, TicketAction.VIEW, ticket)
        return ticket

    def approve_ticket(self, actor: Actor, ticket_id: TicketId) -> Ticket:
        """Load, authorize, approve, persist.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
            TicketAccessDeniedError: If the actor does not own the ticket.
            InvalidTransitionError: If the ticket is not pending.
            StaleTicketError: If another request changed the status first.
        """
        ticket = self._must_get(ticket_id)
        assert_can(actor, TicketAction.APPROVE, ticket)
        return self._apply(ticket, approve_ticket, "ticket.approved")

    def reject_ticket(self, actor: Actor, ticket_id: TicketId) -> Ticket:
        ticket = self._must_get(ticket_id)
        assert_can(actor, TicketAction.REJECT, ticket)
        return self._apply(ticket, reject_ticket, "ticket.rejected")

    def mark_paid(self, ticket_id: TicketId) -> Ticket:
        """Mark an approved ticket paid.

        System path for payment reconciliation: there is no actor, so no
        policy check. Safety rests on the transition guard and the
        conditional write.
        """
        ticket = self._must_get(ticket_id)
        return self._apply(ticket, mark_ticket_paid, "ticket.paid")

    def get_dashboard(self, actor: Actor) -> list[DashboardTicket]:
        return self._store.find_for_dashboard(acting_user_id(actor))

    def get_public_ticket(self, public_id: TicketPublicId) -> Ticket:
        ticket = self._store.find_by_public_id(public_id)
        if ticket is None:
            raise TicketNotFoundError()
        return ticket

    def _apply(self, ticket: Ticket, transition: Transition, event: str) -> Ticket:
        updated = transition(ticket, self._clock.now())
        stored = self._store.update_status(updated, expected_status=ticket.status)
        if stored is None:
            logger.warning("ticket.stale_write", ticket_id=str(ticket.id), expected=ticket.status.value)
            raise StaleTicketError()
        logger.info(event, ticket_id=str(stored.id), previous=ticket.status.value)
        return stored

    def _must_get(self, ticket_id: TicketId) -> Ticket:
        ticket = self._store.find_by_id(ticket_id)
        if ticket is None:
            raise TicketNotFoundError()
        return ticket
