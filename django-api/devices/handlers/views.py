"""HTTP handlers (views) for the pairing handshake and device management."""

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from config import services
from core.domain.value_objects import DeviceId
from core.handlers.identity import require_user_actor
from devices.domain.errors import DeviceNotFoundError
from devices.handlers.serializers import (
    CompletePairingSerializer,
    IssuedDeviceSerializer,
    PairingCodeSerializer,
)


class PairingStartView(APIView):
    """Handler for POST /api/web/pairing/start"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        actor = require_user_actor(request)
        pairing = services.make_pairing_service().start_pairing(actor.user_id)
        return Response(PairingCodeSerializer(pairing).data, status=status.HTTP_201_CREATED)


class PairingCompleteView(APIView):
    """Handler for POST /api/ext/pairing/complete

    Unauthenticated: possession of the pairing code is the credential.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = CompletePairingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        issued = services.make_pairing_service().complete_pairing(
            serializer.validated_data["pairing_code"],
            label=serializer.validated_data.get("label"),
            user_agent=request.headers.get("User-Agent"),
        )
        return Response(IssuedDeviceSerializer(issued).data, status=status.HTTP_201_CREATED)


class DeviceRevokeView(APIView):
    """Handler for POST /api/web/devices/{device_id}/revoke"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, device_id: str) -> Response:
        actor = require_user_actor(request)
        try:
            parsed = DeviceId.from_string(device_id)
        except ValueError as err:
            raise DeviceNotFoundError() from err
        services.make_device_auth_service().revoke(actor.user_id, parsed)
        return Response(status=status.HTTP_204_NO_CONTENT)
