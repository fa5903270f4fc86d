"""Dict-backed ticket provider.

Useful for local runs and tests. Nothing survives the process.
"""

import itertools
from dataclasses import replace
from typing import Any

from tickets.domain import (
    Attendee,
    AttendeeId,
    Capability,
    Event,
    EventId,
    Ticket,
    TicketId,
)
from tickets.domain.errors import ProviderExecutionError
from tickets.providers.interfaces import TicketProvider


class InMemoryTicketProvider(TicketProvider):
    """Keeps tickets and attendees in insertion-ordered dicts."""

    capabilities = frozenset({Capability.EVENT_LOOKUP, Capability.REPORTS})

    def __init__(
        self,
        key: str = "memory",
        name: str = "In-memory tickets",
        *,
        reports_url: str | None = None,
        extra_field_names: tuple[str, ...] = (),
    ) -> None:
        self.key = key
        self.name = name
        self._reports_url = reports_url
        self._extra_field_names = extra_field_names
        self._ticket_ids = itertools.count(1)
        self._attendee_ids = itertools.count(1)
        self._tickets: dict[int, tuple[EventId, Ticket]] = {}
        self._extra: dict[int, dict[str, Any]] = {}
        self._attendees: dict[int, Attendee] = {}

    def get_ticket(self, event_id: EventId, ticket_id: TicketId) -> Ticket | None:
        stored = self._tickets.get(ticket_id.value)
        if stored is None or stored[0] != event_id:
            return None
        return stored[1]

    def get_tickets(self, event_id: EventId) -> list[Ticket]:
        return [ticket for owner, ticket in self._tickets.values() if owner == event_id]

    def get_attendees(self, event_id: EventId) -> list[Attendee]:
        return [a for a in self._attendees.values() if a.event_id == event_id]

    def save_ticket(
        self, event_id: EventId, ticket: Ticket, raw_data: dict[str, Any]
    ) -> Ticket:
        if ticket.id is None:
            ticket = ticket.with_id(TicketId(next(self._ticket_ids)))
        elif self.get_ticket(event_id, ticket.id) is None:
            raise ProviderExecutionError("Ticket does not belong to this event")
        self._tickets[ticket.id.value] = (event_id, ticket)
        self._extra[ticket.id.value] = {
            name: raw_data[name] for name in self._extra_field_names if name in raw_data
        }
        return ticket

    def delete_ticket(self, event_id: EventId, ticket_id: TicketId) -> bool:
        if self.get_ticket(event_id, ticket_id) is None:
            return False
        del self._tickets[ticket_id.value]
        self._extra.pop(ticket_id.value, None)
        return True

    def checkin(self, attendee_id: AttendeeId) -> bool:
        return self._set_checked_in(attendee_id, True)

    def uncheckin(self, attendee_id: AttendeeId) -> bool:
        return self._set_checked_in(attendee_id, False)

    def get_extra_fields(self, event_id: EventId, ticket_id: TicketId) -> dict[str, Any]:
        return dict(self._extra.get(ticket_id.value, {}))

    def get_event_for_ticket(self, candidate_id: int) -> Event | None:
        stored = self._tickets.get(candidate_id)
        if stored is None:
            return None
        return Event(id=stored[0])

    def get_event_reports_link(self, event_id: EventId) -> str | None:
        if not self._reports_url:
            return None
        return f"{self._reports_url}?event_id={event_id.value}"

    def get_ticket_reports_link(self, event_id: EventId, ticket_id: TicketId) -> str | None:
        if not self._reports_url:
            return None
        return f"{self._reports_url}?event_id={event_id.value}&ticket_id={ticket_id.value}"

    def sell(self, event_id: EventId, ticket_id: TicketId, holder_name: str = "") -> Attendee:
        """Record a sold ticket and return the new attendee."""
        if self.get_ticket(event_id, ticket_id) is None:
            raise ProviderExecutionError("Cannot sell a ticket that does not exist")
        attendee_id = next(self._attendee_ids)
        attendee = Attendee(
            id=AttendeeId(attendee_id),
            event_id=event_id,
            ticket_id=ticket_id,
            provider_key=self.key,
            holder_name=holder_name,
            order_id=f"{self.key}-{attendee_id}",
        )
        self._attendees[attendee_id] = attendee
        return attendee

    def _set_checked_in(self, attendee_id: AttendeeId, checked_in: bool) -> bool:
        attendee = self._attendees.get(attendee_id.value)
        if attendee is None:
            return False
        self._attendees[attendee_id.value] = replace(attendee, checked_in=checked_in)
        return True
