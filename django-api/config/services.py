"""Composition root: build services from Django stores and configured providers.

Views call these per request; Django owns the database connection for the
request and releases it when the request ends.
"""

from datetime import timedelta

from django.conf import settings

from core.providers import RandomIdProvider, SystemClock
from devices.services.device_auth_service import DeviceAuthService
from devices.services.pairing_service import PairingService
from devices.stores.django_store import DjangoDeviceStore, DjangoPairingTokenStore
from tickets.payments.port import PaymentPort
from tickets.payments.stripe_adapter import StripePaymentAdapter
from tickets.services.client_service import ClientService
from tickets.services.payment_service import PaymentService
from tickets.services.ticket_service import TicketService
from tickets.stores.django_store import DjangoClientStore, DjangoTicketStore


def make_ticket_service() -> TicketService:
    return TicketService(
        store=DjangoTicketStore(),
        client_store=DjangoClientStore(),
        clock=SystemClock(),
        ids=RandomIdProvider(),
    )


def make_client_service() -> ClientService:
    return ClientService(store=DjangoClientStore(), clock=SystemClock(), ids=RandomIdProvider())


def make_payment_port() -> PaymentPort:
    return StripePaymentAdapter(settings.STRIPE_SECRET_KEY, settings.STRIPE_WEBHOOK_SECRET)


def make_payment_service() -> PaymentService:
    return PaymentService(
        payment_port=make_payment_port(),
        ticket_service=make_ticket_service(),
        base_url=settings.BASE_URL,
        currency=settings.PAYMENT_CURRENCY,
        strict_correlation=settings.PAYMENT_STRICT_CORRELATION,
    )


def make_pairing_service() -> PairingService:
    return PairingService(
        pairing_store=DjangoPairingTokenStore(),
        device_store=DjangoDeviceStore(),
        clock=SystemClock(),
        ttl=timedelta(seconds=settings.PAIRING_TTL_SECONDS),
    )


def make_device_auth_service() -> DeviceAuthService:
    return DeviceAuthService(store=DjangoDeviceStore(), clock=SystemClock())
