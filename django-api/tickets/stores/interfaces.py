"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from core.domain.value_objects import ClientId, TicketId, TicketPublicId, UserId
from tickets.domain.models import Client, DashboardTicket, Ticket, TicketStatus


class TicketStore(ABC):
    """Interface for ticket persistence operations."""

    @abstractmethod
    def find_by_id(self, ticket_id: TicketId) -> Ticket | None:
        """Return a ticket by internal ID, or None if not found."""
        ...

    @abstractmethod
    def find_by_public_id(self, public_id: TicketPublicId) -> Ticket | None:
        """Return a ticket by its public capability id, or None if not found."""
        ...

    @abstractmethod
    def create(self, ticket: Ticket) -> Ticket:
        """Persist a new ticket and return it as stored."""
        ...

    @abstractmethod
    def update_status(self, ticket: Ticket, expected_status: TicketStatus) -> Ticket | None:
        """Write ``ticket.status`` and ``ticket.updated_at``.

        The write only applies while the stored status still equals
        *expected_status*. Returns None, writing nothing, when it does not.
        """
        ...

    @abstractmethod
    def find_for_dashboard(self, user_id: UserId) -> list[DashboardTicket]:
        """Return the owner's tickets with client names, newest first."""
        ...


class ClientStore(ABC):
    """Interface for client persistence operations."""

    @abstractmethod
    def find_by_id(self, client_id: ClientId) -> Client | None:
        """Return a client by ID, or None if not found."""
        ...

    @abstractmethod
    def create(self, client: Client) -> Client:
        """Persist a new client and return it as stored."""
        ...
