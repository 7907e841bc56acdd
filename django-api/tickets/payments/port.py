"""Payment provider port.

No provider SDK types cross this boundary.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

CHECKOUT_COMPLETED = "checkout.session.completed"


@dataclass(frozen=True)
class CheckoutRequest:
    amount_cents: int
    currency: str
    success_url: str
    cancel_url: str
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CheckoutSession:
    url: str
    provider_session_id: str


@dataclass(frozen=True)
class WebhookEvent:
    type: str
    provider_session_id: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


class PaymentPort(ABC):
    """Interface for payment provider interactions."""

    @abstractmethod
    def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        """Create a hosted checkout session.

        Raises:
            PaymentError: PAYMENT_PROVIDER_ERROR when the provider call fails.
        """
        ...

    @abstractmethod
    def verify_and_parse_event(self, payload: bytes, signature: str) -> WebhookEvent:
        """Verify a signed webhook payload and reduce it to a WebhookEvent.

        Raises:
            PaymentError: WEBHOOK_SIGNATURE_INVALID when verification fails.
        """
        ...
