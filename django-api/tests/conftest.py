"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from core.domain.actors import DeviceActor, UserActor
from core.domain.value_objects import Cents, DeviceId, UserId
from core.providers import RandomIdProvider
from devices.services.device_auth_service import DeviceAuthService
from devices.services.pairing_service import PairingService
from fakes import (
    FakePaymentPort,
    FixedClock,
    InMemoryClientStore,
    InMemoryDeviceStore,
    InMemoryPairingTokenStore,
    InMemoryTicketStore,
)
from tickets.services.client_service import ClientService
from tickets.services.payment_service import PaymentService
from tickets.services.ticket_service import TicketService

BASE_URL = "https://app.test"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


# Domain-level fixtures (no database)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def owner() -> UserActor:
    return UserActor(user_id=UserId("owner-1"))


@pytest.fixture
def stranger() -> UserActor:
    return UserActor(user_id=UserId("stranger-2"))


@pytest.fixture
def client_store() -> InMemoryClientStore:
    return InMemoryClientStore()


@pytest.fixture
def ticket_store(client_store) -> InMemoryTicketStore:
    return InMemoryTicketStore(client_store)


@pytest.fixture
def client_service(client_store, clock) -> ClientService:
    return ClientService(store=client_store, clock=clock, ids=RandomIdProvider())


@pytest.fixture
def ticket_service(ticket_store, client_store, clock) -> TicketService:
    return TicketService(store=ticket_store, client_store=client_store, clock=clock, ids=RandomIdProvider())


@pytest.fixture
def acme(client_service, owner):
    return client_service.create_client(owner, "Acme Corp")


@pytest.fixture
def pending_ticket(ticket_service, owner, acme):
    return ticket_service.create_ticket(owner, acme.id, "Swap the hero image", Cents(5000))


@pytest.fixture
def approved_ticket(ticket_service, owner, pending_ticket):
    return ticket_service.approve_ticket(owner, pending_ticket.id)


@pytest.fixture
def payment_port() -> FakePaymentPort:
    return FakePaymentPort()


@pytest.fixture
def payment_service(payment_port, ticket_service) -> PaymentService:
    return PaymentService(payment_port, ticket_service, BASE_URL)


@pytest.fixture
def pairing_store() -> InMemoryPairingTokenStore:
    return InMemoryPairingTokenStore()


@pytest.fixture
def device_store() -> InMemoryDeviceStore:
    return InMemoryDeviceStore()


@pytest.fixture
def pairing_service(pairing_store, device_store, clock) -> PairingService:
    return PairingService(pairing_store=pairing_store, device_store=device_store, clock=clock)


@pytest.fixture
def device_auth_service(device_store, clock) -> DeviceAuthService:
    return DeviceAuthService(store=device_store, clock=clock)


@pytest.fixture
def device_actor(owner) -> DeviceActor:
    return DeviceActor(user_id=owner.user_id, device_id=DeviceId.from_string("8b0c8f7e-4f55-4d0e-9a51-3f3c7a8f2d11"))


# HTTP-level fixtures (database)


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="freelancer", password="pw-123456")


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username="intruder", password="pw-654321")


@pytest.fixture
def web_client(api_client, user) -> APIClient:
    api_client.force_login(user)
    return api_client


@pytest.fixture
def fake_payment_port(monkeypatch) -> FakePaymentPort:
    port = FakePaymentPort()
    monkeypatch.setattr("config.services.make_payment_port", lambda: port)
    return port
