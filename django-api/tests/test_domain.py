"""Unit tests for domain primitives and the ticket lifecycle.

These test invariants that must hold at construction time and the
transition table.
Run with: pytest tests/test_domain.py -v
"""

import secrets
import uuid

import pytest

from core.domain.actors import DeviceActor, GuestActor, PublicActor, UserActor, acting_user_id, actor_kind
from core.domain.errors import DomainError, ErrorCode, ForbiddenError, InvalidInputError, invariant
from core.domain.value_objects import Cents, ClientId, DeviceId, TicketId, TicketPublicId, UserId
from fakes import T0
from tickets.domain.errors import InvalidTransitionError
from tickets.domain.models import (
    MAX_MESSAGE_LENGTH,
    TicketStatus,
    approve_ticket,
    can_transition,
    create_client,
    create_ticket,
    mark_ticket_paid,
    reject_ticket,
)


def make_ticket(**overrides):
    fields = {
        "id": TicketId(uuid.uuid4()),
        "public_id": TicketPublicId(secrets.token_urlsafe(32)),
        "user_id": UserId("u1"),
        "client_id": ClientId(uuid.uuid4()),
        "message": "Change the footer colour",
        "price_cents": Cents(2500),
        "now": T0,
    }
    fields.update(overrides)
    return create_ticket(**fields)


class TestCents:
    """Tests for Cents value object."""

    def test_cents_accepts_zero(self):
        """A free change request is allowed."""
        assert Cents(0).value == 0

    def test_cents_rejects_negative_amount(self):
        """Cents raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Cents(-1)

    def test_cents_rejects_non_integers(self):
        """Floats and bools are not amounts."""
        with pytest.raises(ValueError):
            Cents(10.5)
        with pytest.raises(ValueError):
            Cents(True)

    def test_cents_str_format(self):
        """Cents string representation is formatted to 2 decimal places."""
        assert str(Cents(5000)) == "50.00"
        assert str(Cents(7)) == "0.07"


class TestIdentifiers:
    """Tests for identifier value objects."""

    def test_user_id_rejects_blank(self):
        """UserId cannot be empty or whitespace."""
        with pytest.raises(ValueError):
            UserId("   ")

    def test_user_id_is_trimmed(self):
        """UserId strips surrounding whitespace."""
        assert UserId("  42 ").value == "42"

    def test_ticket_id_from_string(self):
        """TicketId parses a UUID string and round-trips through str."""
        raw = str(uuid.uuid4())
        assert str(TicketId.from_string(raw)) == raw

    def test_ticket_id_from_string_rejects_garbage(self):
        """A non-UUID string is a ValueError."""
        with pytest.raises(ValueError):
            TicketId.from_string("not-a-uuid")

    def test_distinct_id_types_never_compare_equal(self):
        """A TicketId and a ClientId with the same UUID are different values."""
        value = uuid.uuid4()
        assert TicketId(value) != ClientId(value)
        assert DeviceId(value) != TicketId(value)

    def test_public_id_accepts_generated_token(self):
        """32 random bytes in URL-safe base64 are a valid public id."""
        token = secrets.token_urlsafe(32)
        assert TicketPublicId(token).value == token

    @pytest.mark.parametrize("raw", ["", "short", "a" * 42, "a" * 43 + "!", "a" * 129])
    def test_public_id_rejects_guessable_or_malformed_values(self, raw):
        """Public ids must be long and URL-safe."""
        with pytest.raises(ValueError):
            TicketPublicId(raw)


class TestErrors:
    """Tests for the domain error taxonomy."""

    def test_domain_error_str_includes_code(self):
        """String form carries code and message."""
        assert str(InvalidInputError("bad")) == "VALIDATION_ERROR: bad"

    def test_invariant_raises_on_false(self):
        """invariant() raises INVARIANT_VIOLATION when the condition fails."""
        with pytest.raises(DomainError) as exc_info:
            invariant(False, "broken")
        assert exc_info.value.code is ErrorCode.INVARIANT_VIOLATION

    def test_invariant_passes_on_true(self):
        """invariant() is silent when the condition holds."""
        invariant(True, "fine")


class TestActors:
    """Tests for actor helpers."""

    def test_actor_kind(self):
        """Each actor variant reports its kind."""
        user_id = UserId("u1")
        assert actor_kind(UserActor(user_id)) == "user"
        assert actor_kind(DeviceActor(user_id, DeviceId(uuid.uuid4()))) == "device"
        assert actor_kind(PublicActor()) == "public"
        assert actor_kind(GuestActor("g-1")) == "guest"

    def test_device_acts_for_bound_user(self):
        """A device resolves to the user it is bound to."""
        user_id = UserId("u1")
        assert acting_user_id(DeviceActor(user_id, DeviceId(uuid.uuid4()))) == user_id

    @pytest.mark.parametrize("actor", [PublicActor(), GuestActor("g-1")])
    def test_anonymous_actors_have_no_user(self, actor):
        """Public and guest actors cannot act for a user."""
        with pytest.raises(ForbiddenError):
            acting_user_id(actor)


class TestCreateClient:
    """Tests for client construction."""

    def test_name_is_trimmed(self):
        """Client names are stored trimmed."""
        client = create_client(id=ClientId(uuid.uuid4()), user_id=UserId("u1"), name="  Acme ", created_at=T0)
        assert client.name == "Acme"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 81])
    def test_name_must_be_1_to_80_chars(self, name):
        """Blank or overlong names are validation errors."""
        with pytest.raises(InvalidInputError):
            create_client(id=ClientId(uuid.uuid4()), user_id=UserId("u1"), name=name, created_at=T0)


class TestCreateTicket:
    """Tests for ticket construction."""

    def test_new_ticket_is_pending(self):
        """Tickets start pending with both timestamps set to now."""
        ticket = make_ticket()
        assert ticket.status is TicketStatus.PENDING
        assert ticket.created_at == T0
        assert ticket.updated_at == T0

    def test_message_is_trimmed(self):
        """Surrounding whitespace is removed from the message."""
        assert make_ticket(message="\n  Fix typo  \t").message == "Fix typo"

    def test_message_at_limit_is_accepted(self):
        """A message of exactly the maximum length is fine."""
        assert len(make_ticket(message="m" * MAX_MESSAGE_LENGTH).message) == MAX_MESSAGE_LENGTH

    @pytest.mark.parametrize("message", ["", "   ", "m" * (MAX_MESSAGE_LENGTH + 1)])
    def test_message_rejected(self, message):
        """Blank and overlong messages are validation errors."""
        with pytest.raises(InvalidInputError):
            make_ticket(message=message)

    def test_blank_asset_url_becomes_none(self):
        """An empty asset URL is stored as absent."""
        assert make_ticket(asset_url="").asset_url is None


class TestTicketLifecycle:
    """Tests for the ticket state machine."""

    def test_pending_can_be_approved(self):
        """approve moves pending to approved and stamps updated_at."""
        later = T0.replace(hour=12)
        approved = approve_ticket(make_ticket(), later)
        assert approved.status is TicketStatus.APPROVED
        assert approved.updated_at == later
        assert approved.created_at == T0

    def test_pending_can_be_rejected(self):
        """reject moves pending to rejected."""
        assert reject_ticket(make_ticket(), T0).status is TicketStatus.REJECTED

    def test_approved_can_be_paid(self):
        """mark paid moves approved to paid."""
        paid = mark_ticket_paid(approve_ticket(make_ticket(), T0), T0)
        assert paid.status is TicketStatus.PAID

    def test_transition_does_not_mutate_input(self):
        """Transitions return a new ticket."""
        ticket = make_ticket()
        approve_ticket(ticket, T0)
        assert ticket.status is TicketStatus.PENDING

    def test_pending_cannot_be_paid(self):
        """Payment requires approval first."""
        with pytest.raises(InvalidTransitionError, match="Only approved tickets"):
            mark_ticket_paid(make_ticket(), T0)

    def test_approved_cannot_be_approved_again(self):
        """Approval is not idempotent at the domain level."""
        with pytest.raises(InvalidTransitionError):
            approve_ticket(approve_ticket(make_ticket(), T0), T0)

    def test_approved_cannot_be_rejected(self):
        """Rejection is only possible from pending."""
        with pytest.raises(InvalidTransitionError, match="Only pending tickets can be rejected"):
            reject_ticket(approve_ticket(make_ticket(), T0), T0)

    @pytest.mark.parametrize("terminal", [TicketStatus.PAID, TicketStatus.REJECTED])
    def test_terminal_statuses_have_no_exits(self, terminal):
        """Nothing leaves paid or rejected."""
        for target in TicketStatus:
            assert not can_transition(terminal, target)

    def test_transition_errors_are_conflicts(self):
        """Invalid transitions map to CONFLICT."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            reject_ticket(reject_ticket(make_ticket(), T0), T0)
        assert exc_info.value.code is ErrorCode.CONFLICT

    def test_only_listed_transitions_are_allowed(self):
        """The transition table has exactly three edges."""
        allowed = {(a, b) for a in TicketStatus for b in TicketStatus if can_transition(a, b)}
        assert allowed == {
            (TicketStatus.PENDING, TicketStatus.APPROVED),
            (TicketStatus.PENDING, TicketStatus.REJECTED),
            (TicketStatus.APPROVED, TicketStatus.PAID),
        }
