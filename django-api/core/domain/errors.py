"""Domain error codes shared by every app."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidInputError(DomainError):
    """Raised when input fails a domain validation rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class InvariantViolationError(DomainError):
    """Raised when an internal contract that should be impossible to break is broken."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVARIANT_VIOLATION, message=message)


class NotFoundError(DomainError):
    """Raised when an entity does not exist (or must look as if it does not)."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message=message)


class ForbiddenError(DomainError):
    """Raised when the authorization policy denies an action."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)


class ConflictError(DomainError):
    """Raised when a well-formed, permitted request does not fit the current state."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONFLICT, message=message)


def invariant(condition: object, message: str) -> None:
    """Raise InvariantViolationError unless *condition* holds."""
    if not condition:
        raise InvariantViolationError(message)
