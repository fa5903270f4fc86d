"""Domain models shared by every ticket provider.

These are pure domain objects with no API input rules.
Django ORM models are in tickets/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from tickets.domain.value_objects import AttendeeId, EventId, Money, TicketId


class Capability(Enum):
    """Optional features a provider may declare."""

    EVENT_LOOKUP = "event_lookup"
    REPORTS = "reports"


@dataclass(frozen=True)
class Event:
    """Domain representation of the event that owns tickets."""

    id: EventId
    title: str = ""


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a purchasable ticket definition."""

    id: TicketId | None
    name: str | None
    description: str | None
    price: Money | None
    provider_key: str
    start_date: datetime | None = None
    end_date: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def with_id(self, ticket_id: TicketId) -> "Ticket":
        return replace(self, id=ticket_id)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value if self.id is not None else None,
            "name": self.name,
            "description": self.description,
            "price": str(self.price) if self.price is not None else None,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "provider": self.provider_key,
        }


@dataclass(frozen=True)
class Attendee:
    """A sold ticket instance, trackable for check-in."""

    id: AttendeeId
    event_id: EventId
    ticket_id: TicketId
    provider_key: str
    holder_name: str = ""
    order_id: str = ""
    checked_in: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value,
            "event_id": self.event_id.value,
            "ticket_id": self.ticket_id.value,
            "provider": self.provider_key,
            "holder_name": self.holder_name,
            "order_id": self.order_id,
            "check_in": self.checked_in,
        }


@dataclass(frozen=True)
class TicketDetail:
    """A ticket plus the provider-specific data shown when editing it."""

    ticket: Ticket
    extra_fields: dict[str, Any] = field(default_factory=dict)
    reports_link: str | None = None

    def as_dict(self) -> dict[str, Any]:
        data = self.ticket.as_dict()
        data["extra_fields"] = dict(self.extra_fields)
        if self.reports_link is not None:
            data["reports_link"] = self.reports_link
        return data


@dataclass(frozen=True)
class AttendeeSummary:
    """Attendees of an event merged across providers."""

    event_id: EventId
    attendees: tuple[Attendee, ...] = ()

    @property
    def total(self) -> int:
        return len(self.attendees)

    @property
    def checked_in(self) -> int:
        return sum(1 for attendee in self.attendees if attendee.checked_in)
