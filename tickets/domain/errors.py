"""Domain error codes for the tickets module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    UNKNOWN_PROVIDER = "UNKNOWN_PROVIDER"
    DUPLICATE_PROVIDER = "DUPLICATE_PROVIDER"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    PROVIDER_FAILED = "PROVIDER_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)
        object.__setattr__(self, "field", field)


class AuthorizationError(DomainError):
    """Raised when a capability check or a request token check fails."""

    def __init__(self, message: str = "Not allowed") -> None:
        super().__init__(code=ErrorCode.NOT_AUTHORIZED, message=message)


class UnknownProviderError(DomainError):
    """Raised when a provider key is not registered."""

    def __init__(self, provider_key: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_PROVIDER,
            message="Unknown ticket provider",
        )
        object.__setattr__(self, "provider_key", provider_key)


class DuplicateProviderError(DomainError):
    """Raised when a provider key is registered twice without replace."""

    def __init__(self, provider_key: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_PROVIDER,
            message=f"Provider '{provider_key}' is already registered",
        )
        object.__setattr__(self, "provider_key", provider_key)


class NotFoundError(DomainError):
    """Base class for missing tickets, attendees and events."""


class EventNotFoundError(NotFoundError):
    """Raised when an event does not exist."""

    def __init__(self, event_id: int) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        object.__setattr__(self, "event_id", event_id)


class TicketNotFoundError(NotFoundError):
    """Raised when a provider reports no such ticket."""

    def __init__(self, ticket_id: int) -> None:
        super().__init__(code=ErrorCode.TICKET_NOT_FOUND, message="Ticket not found")
        object.__setattr__(self, "ticket_id", ticket_id)


class ProviderExecutionError(DomainError):
    """Raised when a provider fails to save, delete or check in."""

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(code=ErrorCode.PROVIDER_FAILED, message=message)
