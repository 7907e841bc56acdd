"""Django ORM implementation of the ticket and client stores."""

from django.db import transaction

from core.domain.value_objects import Cents, ClientId, TicketId, TicketPublicId, UserId
from tickets import models
from tickets.cache import invalidate_dashboard
from tickets.domain.models import Client, DashboardTicket, Ticket, TicketStatus
from tickets.stores.interfaces import ClientStore, TicketStore


def _ticket_to_domain(row: models.Ticket) -> Ticket:
    return Ticket(
        id=TicketId(row.id),
        public_id=TicketPublicId(row.public_id),
        user_id=UserId(row.user_id),
        client_id=ClientId(row.client_id),
        message=row.message,
        price_cents=Cents(row.price_cents),
        status=TicketStatus(row.status),
        asset_url=row.asset_url or None,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _client_to_domain(row: models.Client) -> Client:
    return Client(
        id=ClientId(row.id),
        user_id=UserId(row.user_id),
        name=row.name,
        created_at=row.created_at,
    )


class DjangoTicketStore(TicketStore):
    """Relational ticket store using Django ORM."""

    def find_by_id(self, ticket_id: TicketId) -> Ticket | None:
        row = models.Ticket.objects.filter(pk=ticket_id.value).first()
        return _ticket_to_domain(row) if row else None

    def find_by_public_id(self, public_id: TicketPublicId) -> Ticket | None:
        row = models.Ticket.objects.filter(public_id=public_id.value).first()
        return _ticket_to_domain(row) if row else None

    def create(self, ticket: Ticket) -> Ticket:
        row = models.Ticket.objects.create(
            id=ticket.id.value,
            public_id=ticket.public_id.value,
            user_id=ticket.user_id.value,
            client_id=ticket.client_id.value,
            message=ticket.message,
            price_cents=ticket.price_cents.value,
            status=ticket.status.value,
            asset_url=ticket.asset_url,
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
        )
        return _ticket_to_domain(row)

    def update_status(self, ticket: Ticket, expected_status: TicketStatus) -> Ticket | None:
        # One conditional UPDATE: of two racing writers only one sees the expected status.
        with transaction.atomic():
            updated = models.Ticket.objects.filter(
                pk=ticket.id.value,
                status=expected_status.value,
            ).update(status=ticket.status.value, updated_at=ticket.updated_at)
            if updated != 1:
                return None
            row = models.Ticket.objects.get(pk=ticket.id.value)
        invalidate_dashboard(row.user_id)
        return _ticket_to_domain(row)

    def find_for_dashboard(self, user_id: UserId) -> list[DashboardTicket]:
        rows = (
            models.Ticket.objects.filter(user_id=user_id.value)
            .select_related("client")
            .order_by("-created_at")
        )
        return [
            DashboardTicket(
                id=TicketId(row.id),
                public_id=TicketPublicId(row.public_id),
                status=TicketStatus(row.status),
                message=row.message,
                price_cents=Cents(row.price_cents),
                asset_url=row.asset_url or None,
                created_at=row.created_at,
                client_id=ClientId(row.client.id),
                client_name=row.client.name,
            )
            for row in rows
        ]


class DjangoClientStore(ClientStore):
    """Relational client store using Django ORM."""

    def find_by_id(self, client_id: ClientId) -> Client | None:
        row = models.Client.objects.filter(pk=client_id.value).first()
        return _client_to_domain(row) if row else None

    def create(self, client: Client) -> Client:
        row = models.Client.objects.create(
            id=client.id.value,
            user_id=client.user_id.value,
            name=client.name,
            created_at=client.created_at,
        )
        return _client_to_domain(row)
