from tickets.handlers.views import (
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

__all__ = [
    "ActorView",
    "ClientCreateView",
    "DashboardView",
    "DeviceTicketApproveView",
    "DeviceTicketCreateView",
    "DeviceTicketRejectView",
    "PaymentWebhookView",
    "PublicCheckoutView",
    "PublicTicketView",
    "TicketApproveView",
    "TicketCreateView",
    "TicketDetailView",
    "TicketRejectView",
]
