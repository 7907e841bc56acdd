from tickets.domain.models import (
    Client,
    DashboardTicket,
    Ticket,
    TicketStatus,
    approve_ticket,
    create_client,
    create_ticket,
    mark_ticket_paid,
    reject_ticket,
)
from tickets.domain.policy import TicketAction, assert_can, can

__all__ = [
    "Client",
    "DashboardTicket",
    "Ticket",
    "TicketStatus",
    "TicketAction",
    "approve_ticket",
    "assert_can",
    "can",
    "create_client",
    "create_ticket",
    "mark_ticket_paid",
    "reject_ticket",
]
