"""Tests for public checkout, webhook reconciliation and the Stripe adapter."""

import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import pytest
import stripe

from core.domain.value_objects import TicketPublicId
from fakes import completed_event
from tickets.domain.errors import TicketNotFoundError, TicketNotPayableError
from tickets.domain.models import TicketStatus
from tickets.payments.errors import PaymentError, PaymentErrorCode
from tickets.payments.port import CheckoutRequest, WebhookEvent
from tickets.payments.stripe_adapter import StripePaymentAdapter
from tickets.services.payment_service import PaymentService, WebhookOutcome

SIGNATURE = "t=1,v1=valid"
WEBHOOK_SECRET = "whsec_test_secret"


def sign(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    timestamp = int(time.time()) if timestamp is None else timestamp
    digest = hmac.new(secret.encode(), f"{timestamp}.{payload}".encode(), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


class TestStartPublicCheckout:
    """Tests for PaymentService.start_public_checkout."""

    def test_approved_ticket_gets_checkout_url(self, payment_service, payment_port, approved_ticket):
        """An approved ticket produces a provider URL with correlation metadata."""
        url = payment_service.start_public_checkout(approved_ticket.public_id)

        assert url == "https://checkout.test/cs_test_1"
        request = payment_port.requests[0]
        assert request.amount_cents == 5000
        assert request.currency == "usd"
        assert request.metadata == {
            "ticketId": str(approved_ticket.id),
            "publicId": str(approved_ticket.public_id),
        }

    def test_return_urls_use_public_id(self, payment_service, payment_port, approved_ticket):
        """Success and cancel URLs point at the public portal."""
        payment_service.start_public_checkout(approved_ticket.public_id)
        request = payment_port.requests[0]
        assert request.success_url == f"https://app.test/t/{approved_ticket.public_id}/success"
        assert request.cancel_url == f"https://app.test/t/{approved_ticket.public_id}"

    def test_pending_ticket_is_not_payable(self, payment_service, payment_port, pending_ticket):
        """Checkout before approval is a conflict and never reaches the provider."""
        with pytest.raises(TicketNotPayableError, match="approved before payment"):
            payment_service.start_public_checkout(pending_ticket.public_id)
        assert payment_port.requests == []

    def test_paid_ticket_is_not_payable(self, payment_service, ticket_service, approved_ticket):
        """A paid ticket cannot be paid twice."""
        ticket_service.mark_paid(approved_ticket.id)
        with pytest.raises(TicketNotPayableError, match="already paid"):
            payment_service.start_public_checkout(approved_ticket.public_id)

    def test_rejected_ticket_is_not_payable(self, payment_service, ticket_service, owner, pending_ticket):
        """A rejected ticket cannot be paid."""
        ticket_service.reject_ticket(owner, pending_ticket.id)
        with pytest.raises(TicketNotPayableError, match="Rejected"):
            payment_service.start_public_checkout(pending_ticket.public_id)

    def test_unknown_public_id(self, payment_service):
        """Unknown capability is NOT_FOUND."""
        with pytest.raises(TicketNotFoundError):
            payment_service.start_public_checkout(TicketPublicId("z" * 43))

    def test_provider_failure_propagates(self, payment_service, payment_port, approved_ticket):
        """Provider errors surface as PaymentError and leave the ticket alone."""
        payment_port.fail_checkout = True
        with pytest.raises(PaymentError) as exc_info:
            payment_service.start_public_checkout(approved_ticket.public_id)
        assert exc_info.value.code is PaymentErrorCode.PAYMENT_PROVIDER_ERROR

    def test_checkout_does_not_change_status(self, payment_service, ticket_service, owner, approved_ticket):
        """Starting checkout is not payment."""
        payment_service.start_public_checkout(approved_ticket.public_id)
        assert ticket_service.get_ticket(owner, approved_ticket.id).status is TicketStatus.APPROVED


class TestHandleWebhook:
    """Tests for PaymentService.handle_webhook."""

    def test_completed_checkout_marks_ticket_paid(self, payment_service, payment_port, ticket_service, owner, approved_ticket):
        """A verified completion moves approved to paid."""
        payment_port.events.append(completed_event(str(approved_ticket.id)))

        assert payment_service.handle_webhook(b"{}", SIGNATURE) is WebhookOutcome.APPLIED
        assert ticket_service.get_ticket(owner, approved_ticket.id).status is TicketStatus.PAID

    def test_duplicate_delivery_is_acknowledged(self, payment_service, payment_port, approved_ticket, ticket_store):
        """Redelivery after success is acknowledged without a second write."""
        payment_port.events.extend([completed_event(str(approved_ticket.id))] * 2)
        payment_service.handle_webhook(b"{}", SIGNATURE)
        writes = ticket_store.writes

        assert payment_service.handle_webhook(b"{}", SIGNATURE) is WebhookOutcome.ACKNOWLEDGED
        assert ticket_store.writes == writes

    def test_completion_for_pending_ticket_is_acknowledged(self, payment_service, payment_port, ticket_service, owner, pending_ticket):
        """A payment for an unapproved ticket is a permanent conflict, not a retry."""
        payment_port.events.append(completed_event(str(pending_ticket.id)))

        assert payment_service.handle_webhook(b"{}", SIGNATURE) is WebhookOutcome.ACKNOWLEDGED
        assert ticket_service.get_ticket(owner, pending_ticket.id).status is TicketStatus.PENDING

    def test_completion_for_unknown_ticket_is_acknowledged(self, payment_service, payment_port):
        """A ticket that no longer exists is acknowledged."""
        payment_port.events.append(completed_event("0b8cbf39-0f2c-4a8e-9f3e-2c1a6a5d0e77"))
        assert payment_service.handle_webhook(b"{}", SIGNATURE) is WebhookOutcome.ACKNOWLEDGED

    def test_other_event_types_are_ignored(self, payment_service, payment_port, approved_ticket, ticket_service, owner):
        """Only checkout completion changes state."""
        payment_port.events.append(WebhookEvent(type="payment_intent.created"))

        assert payment_service.handle_webhook(b"{}", SIGNATURE) is WebhookOutcome.IGNORED
        assert ticket_service.get_ticket(owner, approved_ticket.id).status is TicketStatus.APPROVED

    def test_bad_signature_changes_nothing(self, payment_service, payment_port, approved_ticket, ticket_service, owner):
        """Unverified payloads raise and never touch state."""
        payment_port.events.append(completed_event(str(approved_ticket.id)))

        with pytest.raises(PaymentError) as exc_info:
            payment_service.handle_webhook(b"{}", "t=1,v1=forged")
        assert exc_info.value.code is PaymentErrorCode.WEBHOOK_SIGNATURE_INVALID
        assert ticket_service.get_ticket(owner, approved_ticket.id).status is TicketStatus.APPROVED

    @pytest.mark.parametrize("ticket_id", [None, "", "not-a-uuid"])
    def test_missing_ticket_id_raises_when_strict(self, payment_service, payment_port, ticket_id):
        """Uncorrelated completions are integration bugs in strict mode."""
        payment_port.events.append(completed_event(ticket_id))
        with pytest.raises(PaymentError) as exc_info:
            payment_service.handle_webhook(b"{}", SIGNATURE)
        assert exc_info.value.code is PaymentErrorCode.CHECKOUT_SESSION_INVALID

    def test_missing_ticket_id_is_skipped_when_lenient(self, payment_port, ticket_service):
        """Lenient mode logs and acknowledges uncorrelated completions."""
        service = PaymentService(payment_port, ticket_service, "https://app.test", strict_correlation=False)
        payment_port.events.append(completed_event(None))
        assert service.handle_webhook(b"{}", SIGNATURE) is WebhookOutcome.SKIPPED

    def test_infrastructure_errors_propagate(self, payment_service, payment_port, ticket_store, approved_ticket, monkeypatch):
        """Non-domain failures surface so the provider retries."""

        def broken(ticket_id):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(ticket_store, "find_by_id", broken)
        payment_port.events.append(completed_event(str(approved_ticket.id)))
        with pytest.raises(RuntimeError):
            payment_service.handle_webhook(b"{}", SIGNATURE)


class TestStripeAdapterConfig:
    """Tests for adapter construction."""

    @pytest.mark.parametrize("secret_key, webhook_secret", [("", WEBHOOK_SECRET), ("sk_test_1", "")])
    def test_missing_keys(self, secret_key, webhook_secret):
        """Both keys are required."""
        with pytest.raises(PaymentError) as exc_info:
            StripePaymentAdapter(secret_key, webhook_secret)
        assert exc_info.value.code is PaymentErrorCode.CONFIG_MISSING


class TestStripeCheckout:
    """Tests for StripePaymentAdapter.create_checkout_session."""

    @pytest.fixture
    def adapter(self) -> StripePaymentAdapter:
        return StripePaymentAdapter("sk_test_1", WEBHOOK_SECRET)

    @pytest.fixture
    def checkout_request(self) -> CheckoutRequest:
        return CheckoutRequest(
            amount_cents=5000,
            currency="usd",
            success_url="https://app.test/t/abc/success",
            cancel_url="https://app.test/t/abc",
            metadata={"ticketId": "t-1", "publicId": "abc"},
        )

    def test_creates_session(self, adapter, checkout_request, monkeypatch):
        """The adapter sends a one-line payment session and returns its URL."""
        calls = []

        def create(**kwargs):
            calls.append(kwargs)
            return SimpleNamespace(url="https://checkout.stripe.test/cs_1", id="cs_1")

        monkeypatch.setattr(stripe.checkout.Session, "create", create)

        session = adapter.create_checkout_session(checkout_request)

        assert session.url == "https://checkout.stripe.test/cs_1"
        assert session.provider_session_id == "cs_1"
        sent = calls[0]
        assert sent["api_key"] == "sk_test_1"
        assert sent["mode"] == "payment"
        assert sent["line_items"][0]["price_data"]["unit_amount"] == 5000
        assert sent["metadata"] == {"ticketId": "t-1", "publicId": "abc"}

    def test_provider_error(self, adapter, checkout_request, monkeypatch):
        """Stripe failures become PAYMENT_PROVIDER_ERROR."""

        def create(**kwargs):
            raise stripe.APIConnectionError("network down")

        monkeypatch.setattr(stripe.checkout.Session, "create", create)
        with pytest.raises(PaymentError) as exc_info:
            adapter.create_checkout_session(checkout_request)
        assert exc_info.value.code is PaymentErrorCode.PAYMENT_PROVIDER_ERROR

    def test_session_without_url(self, adapter, checkout_request, monkeypatch):
        """A session missing its URL is unusable."""
        monkeypatch.setattr(stripe.checkout.Session, "create", lambda **kwargs: SimpleNamespace(url=None, id="cs_1"))
        with pytest.raises(PaymentError) as exc_info:
            adapter.create_checkout_session(checkout_request)
        assert exc_info.value.code is PaymentErrorCode.PAYMENT_PROVIDER_ERROR


class TestStripeWebhook:
    """Tests for StripePaymentAdapter.verify_and_parse_event."""

    @pytest.fixture
    def adapter(self) -> StripePaymentAdapter:
        return StripePaymentAdapter("sk_test_1", WEBHOOK_SECRET)

    def test_completed_checkout_is_parsed(self, adapter):
        """Session id and metadata are extracted from a signed completion."""
        payload = json.dumps(
            {
                "id": "evt_1",
                "type": "checkout.session.completed",
                "data": {"object": {"id": "cs_1", "metadata": {"ticketId": "t-1"}}},
            }
        )
        event = adapter.verify_and_parse_event(payload.encode(), sign(payload))

        assert event.type == "checkout.session.completed"
        assert event.provider_session_id == "cs_1"
        assert event.metadata == {"ticketId": "t-1"}

    def test_other_event_carries_type_only(self, adapter):
        """Non-completion events are passed through with their type."""
        payload = json.dumps({"id": "evt_2", "type": "charge.refunded", "data": {"object": {}}})
        event = adapter.verify_and_parse_event(payload.encode(), sign(payload))
        assert event == WebhookEvent(type="charge.refunded")

    def test_wrong_secret_is_rejected(self, adapter):
        """A signature made with another secret fails verification."""
        payload = json.dumps({"type": "checkout.session.completed"})
        with pytest.raises(PaymentError) as exc_info:
            adapter.verify_and_parse_event(payload.encode(), sign(payload, secret="whsec_other"))
        assert exc_info.value.code is PaymentErrorCode.WEBHOOK_SIGNATURE_INVALID

    def test_tampered_payload_is_rejected(self, adapter):
        """Changing the body after signing breaks the signature."""
        payload = json.dumps({"type": "checkout.session.completed"})
        signature = sign(payload)
        with pytest.raises(PaymentError):
            adapter.verify_and_parse_event(payload.replace("completed", "expired").encode(), signature)

    def test_old_timestamp_is_rejected(self, adapter):
        """Replays outside the tolerance window fail."""
        payload = json.dumps({"type": "checkout.session.completed"})
        with pytest.raises(PaymentError):
            adapter.verify_and_parse_event(payload.encode(), sign(payload, timestamp=int(time.time()) - 3600))

    def test_signed_garbage_is_unsupported(self, adapter):
        """A correctly signed body that is not an event is rejected."""
        payload = "not json"
        with pytest.raises(PaymentError) as exc_info:
            adapter.verify_and_parse_event(payload.encode(), sign(payload))
        assert exc_info.value.code is PaymentErrorCode.WEBHOOK_EVENT_UNSUPPORTED
