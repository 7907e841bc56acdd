"""Map domain errors to HTTP responses.

Installed as DRF's ``EXCEPTION_HANDLER``. Views let ``DomainError`` propagate
and this handler turns it into a stable status class with a body carrying
only the error code and a user-safe message. Framework errors (bad input
shape, missing credentials) are reshaped into the same body.
"""

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.domain.errors import DomainError, ErrorCode

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.INVARIANT_VIOLATION: status.HTTP_409_CONFLICT,
}


def error_body(code: str, message: str) -> dict[str, str]:
    return {"code": code, "message": message}


def domain_error_response(error: DomainError) -> Response:
    message = error.message
    if error.code is ErrorCode.INVARIANT_VIOLATION and settings.IS_PRODUCTION:
        message = "Conflict."
    return Response(error_body(error.code.value, message), status=STATUS_BY_CODE[error.code])


def _framework_code(exc: exceptions.APIException) -> str:
    if isinstance(exc, exceptions.ValidationError):
        return ErrorCode.VALIDATION_ERROR.value
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return "UNAUTHORIZED"
    if isinstance(exc, exceptions.PermissionDenied):
        return ErrorCode.FORBIDDEN.value
    if isinstance(exc, exceptions.NotFound):
        return ErrorCode.NOT_FOUND.value
    return str(exc.default_code).upper()


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        field, value = next(iter(detail.items()), ("", ""))
        message = _first_message(value)
        return f"{field}: {message}" if field and field != "non_field_errors" else message
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def exception_handler(exc, context):
    if isinstance(exc, DomainError):
        return domain_error_response(exc)
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(*exc.args)
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied(*exc.args)
    response = drf_exception_handler(exc, context)
    if response is not None and isinstance(exc, exceptions.APIException):
        response.data = error_body(_framework_code(exc), _first_message(exc.detail))
    return response
