from core.handlers.exceptions import domain_error_response, error_body, exception_handler
from core.handlers.identity import GuestCookieMiddleware, web_actor

__all__ = [
    "GuestCookieMiddleware",
    "domain_error_response",
    "error_body",
    "exception_handler",
    "web_actor",
]
