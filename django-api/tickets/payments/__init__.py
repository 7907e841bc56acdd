from tickets.payments.errors import PaymentError, PaymentErrorCode
from tickets.payments.port import (
    CHECKOUT_COMPLETED,
    CheckoutRequest,
    CheckoutSession,
    PaymentPort,
    WebhookEvent,
)

__all__ = [
    "CHECKOUT_COMPLETED",
    "CheckoutRequest",
    "CheckoutSession",
    "PaymentError",
    "PaymentErrorCode",
    "PaymentPort",
    "WebhookEvent",
]
