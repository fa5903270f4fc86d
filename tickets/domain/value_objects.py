"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Self


def _positive_int(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a positive integer")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a positive integer") from None
    if number <= 0:
        raise ValueError(f"{label} must be a positive integer")
    return number


@dataclass(frozen=True)
class EventId:
    """Identifier of the external event that owns tickets."""

    value: int

    def __post_init__(self) -> None:
        _positive_int(self.value, "Event ID")

    @classmethod
    def from_raw(cls, value: Any) -> Self:
        return cls(value=_positive_int(value, "Event ID"))

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class TicketId:
    """Identifier assigned to a ticket by its provider."""

    value: int

    def __post_init__(self) -> None:
        _positive_int(self.value, "Ticket ID")

    @classmethod
    def from_raw(cls, value: Any) -> Self:
        return cls(value=_positive_int(value, "Ticket ID"))

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class AttendeeId:
    """Identifier of a sold ticket instance (the order/attendee ID)."""

    value: int

    def __post_init__(self) -> None:
        _positive_int(self.value, "Attendee ID")

    @classmethod
    def from_raw(cls, value: Any) -> Self:
        return cls(value=_positive_int(value, "Attendee ID"))

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class ProviderKey:
    """Stable key a provider is registered under."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Provider key cannot be empty")

    @classmethod
    def from_raw(cls, value: Any) -> Self:
        if value is None:
            raise ValueError("Provider key cannot be empty")
        return cls(value=str(value).strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except InvalidOperation:
                raise ValueError("Money amount must be a number") from None
        if not self.amount.is_finite():
            raise ValueError("Money amount must be a number")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"
