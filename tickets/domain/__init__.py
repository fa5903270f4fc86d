from tickets.domain.models import (
    Attendee,
    AttendeeSummary,
    Capability,
    Event,
    Ticket,
    TicketDetail,
)
from tickets.domain.value_objects import AttendeeId, EventId, Money, ProviderKey, TicketId

__all__ = [
    "Attendee",
    "AttendeeSummary",
    "Capability",
    "Event",
    "Ticket",
    "TicketDetail",
    "AttendeeId",
    "EventId",
    "Money",
    "ProviderKey",
    "TicketId",
]
