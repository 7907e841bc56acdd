from django.urls import path

from tickets.handlers import (
    ActorView,
    ClientCreateView,
    DashboardView,
    DeviceTicketApproveView,
    DeviceTicketCreateView,
    DeviceTicketRejectView,
    PaymentWebhookView,
    PublicCheckoutView,
    PublicTicketView,
    TicketApproveView,
    TicketCreateView,
    TicketDetailView,
    TicketRejectView,
)

urlpatterns = [
    path("web/actor", ActorView.as_view(), name="web-actor"),
    path("web/clients", ClientCreateView.as_view(), name="client-create"),
    path("web/tickets", TicketCreateView.as_view(), name="ticket-create"),
    path("web/dashboard", DashboardView.as_view(), name="dashboard"),
    path("web/tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path("web/tickets/<str:ticket_id>/approve", TicketApproveView.as_view(), name="ticket-approve"),
    path("web/tickets/<str:ticket_id>/reject", TicketRejectView.as_view(), name="ticket-reject"),
    path("ext/tickets", DeviceTicketCreateView.as_view(), name="device-ticket-create"),
    path(
        "ext/tickets/<str:ticket_id>/approve",
        DeviceTicketApproveView.as_view(),
        name="device-ticket-approve",
    ),
    path(
        "ext/tickets/<str:ticket_id>/reject",
        DeviceTicketRejectView.as_view(),
        name="device-ticket-reject",
    ),
    path("public/tickets/<str:public_id>", PublicTicketView.as_view(), name="public-ticket"),
    path(
        "public/tickets/<str:public_id>/checkout",
        PublicCheckoutView.as_view(),
        name="public-checkout",
    ),
    path("payments/webhook", PaymentWebhookView.as_view(), name="payment-webhook"),
]
