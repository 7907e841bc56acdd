"""Payment service - public checkout and webhook reconciliation.

Webhook error policy:
- Domain errors from ``mark_paid`` (already paid, never approved, unknown
  ticket) are permanent. Retrying cannot fix them, so the event is
  acknowledged and logged.
- Everything else propagates so the provider retries later.
- A completed checkout without a usable ticket id is an integration bug:
  raised when ``strict_correlation`` is on, logged and skipped otherwise.
"""

from enum import StrEnum

import structlog

from core.domain.errors import DomainError
from core.domain.value_objects import TicketId, TicketPublicId
from tickets.domain.errors import TicketNotPayableError, UnknownTicketStatusError
from tickets.domain.models import Ticket, TicketStatus
from tickets.payments.errors import PaymentError, PaymentErrorCode
from tickets.payments.port import CHECKOUT_COMPLETED, CheckoutRequest, PaymentPort, WebhookEvent
from tickets.services.ticket_service import TicketService

logger = structlog.get_logger(__name__)


class WebhookOutcome(StrEnum):
    APPLIED = "applied"
    ACKNOWLEDGED = "acknowledged"
    IGNORED = "ignored"
    SKIPPED = "skipped"


class PaymentService:
    """Service for payment orchestration."""

    def __init__(
        self,
        payment_port: PaymentPort,
        ticket_service: TicketService,
        base_url: str,
        *,
        currency: str = "usd",
        strict_correlation: bool = True,
    ) -> None:
        self._port = payment_port
        self._tickets = ticket_service
        self._base_url = base_url.rstrip("/")
        self._currency = currency
        self._strict_correlation = strict_correlation

    def start_public_checkout(self, public_id: TicketPublicId) -> str:
        """Create a provider checkout session for an approved ticket.

        Returns:
            The provider URL to redirect the payer to.

        Raises:
            TicketNotFoundError: If no ticket has this public id.
            TicketNotPayableError: If the ticket is pending, paid or rejected.
            UnknownTicketStatusError: If the status is outside the lifecycle.
            PaymentError: If the provider call fails.
        """
        ticket = self._tickets.get_public_ticket(public_id)
        self._ensure_payable(ticket)

        session = self._port.create_checkout_session(
            CheckoutRequest(
                amount_cents=ticket.price_cents.value,
                currency=self._currency,
                success_url=f"{self._base_url}/t/{ticket.public_id}/success",
                cancel_url=f"{self._base_url}/t/{ticket.public_id}",
                metadata={
                    "ticketId": str(ticket.id),
                    "publicId": str(ticket.public_id),
                },
            )
        )
        logger.info(
            "payment.checkout_started",
            ticket_id=str(ticket.id),
            provider_session_id=session.provider_session_id,
        )
        return session.url

    def handle_webhook(self, payload: bytes, signature: str) -> WebhookOutcome:
        """Verify a provider event and reconcile it into ticket state.

        Raises:
            PaymentError: If the signature is invalid, or the ticket id is
                missing while ``strict_correlation`` is on.
        """
        event = self._port.verify_and_parse_event(payload, signature)

        if event.type != CHECKOUT_COMPLETED:
            logger.info("payment.webhook_ignored", event_type=event.type)
            return WebhookOutcome.IGNORED

        ticket_id = _correlated_ticket_id(event)
        if ticket_id is None:
            return self._missing_correlation(event)

        try:
            self._tickets.mark_paid(ticket_id)
        except DomainError as err:
            logger.warning(
                "payment.webhook_acknowledged",
                ticket_id=str(ticket_id),
                provider_session_id=event.provider_session_id,
                code=err.code.value,
                reason=err.message,
            )
            return WebhookOutcome.ACKNOWLEDGED

        logger.info(
            "payment.webhook_applied",
            ticket_id=str(ticket_id),
            provider_session_id=event.provider_session_id,
        )
        return WebhookOutcome.APPLIED

    def _ensure_payable(self, ticket: Ticket) -> None:
        match ticket.status:
            case TicketStatus.APPROVED:
                return
            case TicketStatus.PAID:
                raise TicketNotPayableError("Ticket is already paid.")
            case TicketStatus.PENDING:
                raise TicketNotPayableError("Ticket must be approved before payment.")
            case TicketStatus.REJECTED:
                raise TicketNotPayableError("Rejected tickets cannot be paid.")
            case _:
                raise UnknownTicketStatusError(ticket.status)

    def _missing_correlation(self, event: WebhookEvent) -> WebhookOutcome:
        if self._strict_correlation:
            raise PaymentError(
                PaymentErrorCode.CHECKOUT_SESSION_INVALID,
                "Completed checkout carries no valid ticketId metadata.",
            )
        logger.error(
            "payment.webhook_missing_ticket_id",
            provider_session_id=event.provider_session_id,
            metadata_keys=sorted(event.metadata),
        )
        return WebhookOutcome.SKIPPED


def _correlated_ticket_id(event: WebhookEvent) -> TicketId | None:
    raw = event.metadata.get("ticketId")
    if not raw:
        return None
    try:
        return TicketId.from_string(raw)
    except ValueError:
        return None
