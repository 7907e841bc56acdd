"""DRF authentication for the device trust zone.

Reads ``Authorization: Bearer <device token>``. On success ``request.auth``
is the DeviceActor and ``request.user`` stays anonymous: a device is not a
session user, it proxies one.
"""

from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from config import services

KEYWORD = b"bearer"


class DeviceTokenAuthentication(BaseAuthentication):
    def authenticate(self, request):
        parts = get_authorization_header(request).split()
        if not parts or parts[0].lower() != KEYWORD:
            return None
        if len(parts) != 2:
            raise AuthenticationFailed("Invalid device token header.")
        try:
            token = parts[1].decode("ascii")
        except UnicodeDecodeError as err:
            raise AuthenticationFailed("Invalid device token header.") from err

        actor = services.make_device_auth_service().authenticate(token)
        if actor is None:
            raise AuthenticationFailed("Invalid device token.")
        return AnonymousUser(), actor

    def authenticate_header(self, request) -> str:
        return 'Bearer realm="device"'
