"""Payment integration errors.

Infrastructure-adjacent failures of the payment provider integration. These
are deliberately not DomainErrors: callers dispatch on ``code`` and must
never confuse them with business-rule failures.
"""

from dataclasses import dataclass
from enum import Enum


class PaymentErrorCode(Enum):
    """Payment integration error codes."""

    CONFIG_MISSING = "CONFIG_MISSING"
    PAYMENT_PROVIDER_ERROR = "PAYMENT_PROVIDER_ERROR"
    WEBHOOK_SIGNATURE_INVALID = "WEBHOOK_SIGNATURE_INVALID"
    WEBHOOK_EVENT_UNSUPPORTED = "WEBHOOK_EVENT_UNSUPPORTED"
    CHECKOUT_SESSION_INVALID = "CHECKOUT_SESSION_INVALID"


@dataclass(frozen=True)
class PaymentError(Exception):
    """Payment integration error with code and message."""

    code: PaymentErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
