"""Authorization policy for ticket actions ("may this actor even attempt X").

Ownership belongs to ``ticket.user_id``. A device acts with exactly the
authority of the user it is bound to. Public holders of a ticket link may
view it (possession of the public id is the gate, enforced by the lookup)
and nothing else; payment goes through the payment service, never through
a direct state change. Guests may do nothing.

Decisions never look at ``ticket.status``; the state machine owns that.
"""

from enum import StrEnum
from typing import assert_never

from core.domain.actors import Actor, DeviceActor, GuestActor, PublicActor, UserActor
from tickets.domain.errors import TicketAccessDeniedError
from tickets.domain.models import Ticket


class TicketAction(StrEnum):
    CREATE = "create"
    VIEW = "view"
    APPROVE = "approve"
    REJECT = "reject"
    MARK_PAID = "mark_paid"
    WRITE_PINS = "write_pins"


def _is_owner(actor: UserActor | DeviceActor, ticket: Ticket) -> bool:
    return actor.user_id == ticket.user_id


def can(actor: Actor, action: TicketAction, ticket: Ticket | None = None) -> bool:
    if action is TicketAction.CREATE:
        match actor:
            case UserActor() | DeviceActor():
                return True
            case PublicActor() | GuestActor():
                return False
            case _:
                assert_never(actor)

    if ticket is None:
        return False

    match actor:
        case UserActor() | DeviceActor():
            return _is_owner(actor, ticket)
        case PublicActor():
            # Possession of the unguessable public id already happened at lookup.
            return action is TicketAction.VIEW
        case GuestActor():
            return False
        case _:
            assert_never(actor)


def assert_can(actor: Actor, action: TicketAction, ticket: Ticket | None = None) -> None:
    """Raise TicketAccessDeniedError unless the policy allows *action*."""
    if not can(actor, action, ticket):
        raise TicketAccessDeniedError(action.value)
