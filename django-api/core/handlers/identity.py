"""Resolve the Actor behind an inbound request.

Web zone: the Django session user, or a guest backed by a durable cookie.
Device zone: ``request.auth`` holds a DeviceActor set by the device token
authentication class. Public zone: no identity at all, only the public id
in the URL.
"""

import uuid

from django.conf import settings
from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import BasePermission

from core.domain.actors import Actor, DeviceActor, GuestActor, PublicActor, UserActor
from core.domain.value_objects import UserId

GUEST_COOKIE = "ss_uid"
GUEST_MAX_AGE_SECONDS = 60 * 60 * 24 * 90


class GuestCookieMiddleware:
    """Mint the guest cookie on the first unauthenticated visit.

    Must run after ``AuthenticationMiddleware``. Once set, the cookie is
    never regenerated.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        guest_id = request.COOKIES.get(GUEST_COOKIE)
        minted = False
        user = getattr(request, "user", None)
        if not guest_id and not (user is not None and user.is_authenticated):
            guest_id = str(uuid.uuid4())
            minted = True
        request.guest_id = guest_id

        response = self.get_response(request)

        if minted:
            response.set_cookie(
                GUEST_COOKIE,
                guest_id,
                max_age=GUEST_MAX_AGE_SECONDS,
                httponly=True,
                samesite="Lax",
                secure=settings.IS_PRODUCTION,
                path="/",
            )
        return response


def web_actor(request) -> UserActor | GuestActor:
    """Session user if signed in, otherwise the cookie-backed guest."""
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return UserActor(user_id=UserId(str(user.pk)))
    guest_id = getattr(request, "guest_id", None) or request.COOKIES.get(GUEST_COOKIE)
    if not guest_id:
        raise NotAuthenticated("Guest identity is not available.")
    return GuestActor(guest_id=guest_id)


def request_actor(request) -> Actor:
    """Actor for any zone: device token first, then session, never guessed."""
    if isinstance(request.auth, DeviceActor):
        return request.auth
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return UserActor(user_id=UserId(str(user.pk)))
    return PublicActor()


def require_user_actor(request) -> UserActor:
    actor = web_actor(request)
    if not isinstance(actor, UserActor):
        raise NotAuthenticated("User authentication required.")
    return actor


class IsDevice(BasePermission):
    """Allow only requests authenticated by a paired device token."""

    def has_permission(self, request, view) -> bool:
        return isinstance(request.auth, DeviceActor)
