"""Stripe implementation of the payment port."""

import json

import stripe
import structlog

from tickets.payments.errors import PaymentError, PaymentErrorCode
from tickets.payments.port import (
    CHECKOUT_COMPLETED,
    CheckoutRequest,
    CheckoutSession,
    PaymentPort,
    WebhookEvent,
)

logger = structlog.get_logger(__name__)


class StripePaymentAdapter(PaymentPort):
    """Hosted Stripe Checkout plus signed webhook verification."""

    def __init__(
        self,
        secret_key: str,
        webhook_secret: str,
        *,
        product_name: str = "Change request",
        tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE,
    ) -> None:
        if not secret_key:
            raise PaymentError(PaymentErrorCode.CONFIG_MISSING, "Stripe secret key is missing.")
        if not webhook_secret:
            raise PaymentError(PaymentErrorCode.CONFIG_MISSING, "Stripe webhook secret is missing.")
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        self._product_name = product_name
        self._tolerance = tolerance

    def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self._secret_key,
                mode="payment",
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": request.currency,
                            "product_data": {"name": self._product_name},
                            "unit_amount": request.amount_cents,
                        },
                        "quantity": 1,
                    }
                ],
                success_url=request.success_url,
                cancel_url=request.cancel_url,
                metadata=dict(request.metadata),
            )
        except stripe.StripeError as err:
            logger.error("stripe.checkout_failed", error=type(err).__name__)
            raise PaymentError(
                PaymentErrorCode.PAYMENT_PROVIDER_ERROR,
                "Failed to create Stripe checkout session.",
            ) from err

        if not session.url or not session.id:
            raise PaymentError(
                PaymentErrorCode.PAYMENT_PROVIDER_ERROR,
                "Stripe session created but missing URL or ID.",
            )
        logger.info("stripe.checkout_created", session_id=session.id)
        return CheckoutSession(url=session.url, provider_session_id=session.id)

    def verify_and_parse_event(self, payload: bytes, signature: str) -> WebhookEvent:
        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body, signature, self._webhook_secret, self._tolerance
            )
        except (UnicodeDecodeError, stripe.SignatureVerificationError) as err:
            raise PaymentError(
                PaymentErrorCode.WEBHOOK_SIGNATURE_INVALID,
                "Stripe webhook signature verification failed.",
            ) from err

        try:
            event = json.loads(body)
            event_type = event["type"]
        except (ValueError, KeyError, TypeError) as err:
            raise PaymentError(
                PaymentErrorCode.WEBHOOK_EVENT_UNSUPPORTED,
                "Stripe webhook payload is not a valid event.",
            ) from err

        logger.info("stripe.event_verified", event_type=event_type, event_id=event.get("id"))
        if event_type != CHECKOUT_COMPLETED:
            return WebhookEvent(type=event_type)

        session = (event.get("data") or {}).get("object") or {}
        metadata = session.get("metadata") or {}
        return WebhookEvent(
            type=event_type,
            provider_session_id=session.get("id"),
            metadata={str(key): str(value) for key, value in metadata.items()},
        )
