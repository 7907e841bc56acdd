"""Domain errors raised by the tickets module."""

from core.domain.errors import (
    ConflictError,
    ForbiddenError,
    InvariantViolationError,
    NotFoundError,
)


class TicketNotFoundError(NotFoundError):
    """Raised when a ticket does not exist."""

    def __init__(self) -> None:
        super().__init__("Ticket not found.")


class ClientNotFoundError(NotFoundError):
    """Raised when a client does not exist or belongs to someone else."""

    def __init__(self) -> None:
        super().__init__("Client not found.")


class TicketAccessDeniedError(ForbiddenError):
    """Raised when the policy refuses an action on a ticket."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Forbidden: cannot {action} this ticket.")


class InvalidTransitionError(ConflictError):
    """Raised when a ticket cannot move from its current status."""


class StaleTicketError(ConflictError):
    """Raised when the ticket changed status between load and write."""

    def __init__(self) -> None:
        super().__init__("Ticket status changed concurrently; reload and retry.")


class TicketNotPayableError(ConflictError):
    """Raised when checkout is requested for a ticket that cannot be paid."""


class UnknownTicketStatusError(InvariantViolationError):
    """Raised when a ticket carries a status outside the lifecycle."""

    def __init__(self, status: object) -> None:
        super().__init__(f"Unknown ticket status: {status!r}")
