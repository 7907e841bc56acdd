"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Resolve the actor for their trust zone
- Call services for business logic
- Let domain errors reach the DRF exception handler
- Never contain business logic
- Never expose internal error details
"""

import structlog
from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from config import services
from core.domain.actors import actor_kind
from core.domain.errors import InvalidInputError
from core.domain.value_objects import Cents, ClientId, TicketId, TicketPublicId
from core.handlers.exceptions import error_body
from core.handlers.identity import IsDevice, request_actor, require_user_actor, web_actor
from devices.handlers.authentication import DeviceTokenAuthentication
from tickets.cache import dashboard_key
from tickets.domain.errors import TicketNotFoundError
from tickets.handlers.serializers import (
    ClientSerializer,
    CreateClientSerializer,
    CreateTicketSerializer,
    DashboardTicketSerializer,
    PublicTicketSerializer,
    TicketSerializer,
)
from tickets.payments.errors import PaymentError, PaymentErrorCode

logger = structlog.get_logger(__name__)

PAYMENT_ERROR_STATUS: dict[PaymentErrorCode, int] = {
    PaymentErrorCode.WEBHOOK_SIGNATURE_INVALID: status.HTTP_400_BAD_REQUEST,
    PaymentErrorCode.CHECKOUT_SESSION_INVALID: status.HTTP_400_BAD_REQUEST,
    PaymentErrorCode.WEBHOOK_EVENT_UNSUPPORTED: status.HTTP_400_BAD_REQUEST,
    PaymentErrorCode.CONFIG_MISSING: status.HTTP_500_INTERNAL_SERVER_ERROR,
    PaymentErrorCode.PAYMENT_PROVIDER_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def payment_error_response(error: PaymentError) -> Response:
    return Response(error_body(error.code.value, error.message), status=PAYMENT_ERROR_STATUS[error.code])


def parse_ticket_id(raw: str) -> TicketId:
    try:
        return TicketId.from_string(raw)
    except ValueError as err:
        raise InvalidInputError("Invalid ticket id.") from err


def parse_public_id(raw: str) -> TicketPublicId:
    # A malformed capability cannot exist, so it looks exactly like an unknown one.
    try:
        return TicketPublicId(raw)
    except ValueError as err:
        raise TicketNotFoundError() from err


class ActorView(APIView):
    """Handler for GET /api/web/actor"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        return Response({"kind": actor_kind(web_actor(request))})


class ClientCreateView(APIView):
    """Handler for POST /api/web/clients"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        actor = require_user_actor(request)
        serializer = CreateClientSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        client = services.make_client_service().create_client(actor, serializer.validated_data["name"])
        return Response({"client": ClientSerializer(client).data}, status=status.HTTP_201_CREATED)


class TicketCreateView(APIView):
    """Handler for POST /api/web/tickets"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        serializer = CreateTicketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        ticket = services.make_ticket_service().create_ticket(
            request_actor(request),
            client_id=ClientId(data["client_id"]),
            message=data["message"],
            price_cents=Cents(data["price_cents"]),
            asset_url=data.get("asset_url") or None,
        )
        return Response({"ticket": TicketSerializer(ticket).data}, status=status.HTTP_201_CREATED)


class DeviceTicketCreateView(TicketCreateView):
    """Handler for POST /api/ext/tickets"""

    authentication_classes = [DeviceTokenAuthentication]
    permission_classes = [IsDevice]


class TicketDetailView(APIView):
    """Handler for GET /api/web/tickets/{ticket_id}"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, ticket_id: str) -> Response:
        ticket = services.make_ticket_service().get_ticket(request_actor(request), parse_ticket_id(ticket_id))
        return Response(TicketSerializer(ticket).data)


class TicketApproveView(APIView):
    """Handler for POST /api/web/tickets/{ticket_id}/approve"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, ticket_id: str) -> Response:
        ticket = services.make_ticket_service().approve_ticket(
            request_actor(request), parse_ticket_id(ticket_id)
        )
        return Response(TicketSerializer(ticket).data)


class DeviceTicketApproveView(TicketApproveView):
    """Handler for POST /api/ext/tickets/{ticket_id}/approve"""

    authentication_classes = [DeviceTokenAuthentication]
    permission_classes = [IsDevice]


class TicketRejectView(APIView):
    """Handler for POST /api/web/tickets/{ticket_id}/reject"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, ticket_id: str) -> Response:
        ticket = services.make_ticket_service().reject_ticket(
            request_actor(request), parse_ticket_id(ticket_id)
        )
        return Response(TicketSerializer(ticket).data)


class DeviceTicketRejectView(TicketRejectView):
    """Handler for POST /api/ext/tickets/{ticket_id}/reject"""

    authentication_classes = [DeviceTokenAuthentication]
    permission_classes = [IsDevice]


class DashboardView(APIView):
    """Handler for GET /api/web/dashboard"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        actor = require_user_actor(request)
        key = dashboard_key(actor.user_id.value)
        tickets = cache.get(key)
        if tickets is None:
            projection = services.make_ticket_service().get_dashboard(actor)
            tickets = DashboardTicketSerializer(projection, many=True).data
            cache.set(key, tickets, settings.DASHBOARD_CACHE_TTL)
        return Response({"tickets": tickets})


class PublicTicketView(APIView):
    """Handler for GET /api/public/tickets/{public_id}"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request: Request, public_id: str) -> Response:
        ticket = services.make_ticket_service().get_public_ticket(parse_public_id(public_id))
        return Response(PublicTicketSerializer(ticket).data)


class PublicCheckoutView(APIView):
    """Handler for POST /api/public/tickets/{public_id}/checkout"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request, public_id: str) -> Response:
        try:
            url = services.make_payment_service().start_public_checkout(parse_public_id(public_id))
        except PaymentError as err:
            logger.error("payment.checkout_error", code=err.code.value)
            return payment_error_response(err)
        return Response({"url": url})


class PaymentWebhookView(APIView):
    """Handler for POST /api/payments/webhook

    Signature verification is the only trust; there is no actor. Domain
    conflicts are acknowledged by the service, unknown failures propagate
    as 500 so the provider retries.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        payload = request.body
        signature = request.headers.get("Stripe-Signature", "")
        if not signature:
            return Response(
                error_body("WEBHOOK_SIGNATURE_INVALID", "Missing Stripe-Signature header."),
                status=status.HTTP_400_BAD_REQUEST,
            )
        if not payload:
            return Response(error_body("VALIDATION_ERROR", "Empty body."), status=status.HTTP_400_BAD_REQUEST)

        try:
            outcome = services.make_payment_service().handle_webhook(payload, signature)
        except PaymentError as err:
            logger.error("payment.webhook_error", code=err.code.value, reason=err.message)
            return payment_error_response(err)
        return Response({"received": True, "outcome": outcome.value})
