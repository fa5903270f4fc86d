"""Ticket provider interface.

Every ticket-selling backend implements this contract. Providers own their
storage and return domain models; the core never reaches past them.
"""

from abc import ABC, abstractmethod
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


class TicketProvider(ABC):
    """Interface for a ticket provider.

    Optional features are declared in ``capabilities`` and must be probed
    with :meth:`supports` before the matching method is called.
    """

    key: str = ""
    name: str = ""
    capabilities: frozenset[Capability] = frozenset()

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @abstractmethod
    def get_ticket(self, event_id: EventId, ticket_id: TicketId) -> Ticket | None:
        """Return a single ticket of the event, or None if not found."""
        ...

    @abstractmethod
    def get_tickets(self, event_id: EventId) -> list[Ticket]:
        """Return all tickets this provider sells for the event."""
        ...

    @abstractmethod
    def get_attendees(self, event_id: EventId) -> list[Attendee]:
        """Return all attendees (sold tickets) for the event."""
        ...

    @abstractmethod
    def save_ticket(
        self, event_id: EventId, ticket: Ticket, raw_data: dict[str, Any]
    ) -> Ticket:
        """Create or update a ticket and return it with its ID assigned.

        Raises:
            ProviderExecutionError: If the ticket could not be stored.
        """
        ...

    @abstractmethod
    def delete_ticket(self, event_id: EventId, ticket_id: TicketId) -> bool:
        """Delete a ticket. Return False if there is no such ticket."""
        ...

    @abstractmethod
    def checkin(self, attendee_id: AttendeeId) -> bool:
        """Mark an attendee as checked in."""
        ...

    @abstractmethod
    def uncheckin(self, attendee_id: AttendeeId) -> bool:
        """Mark an attendee as not checked in."""
        ...

    @abstractmethod
    def get_extra_fields(self, event_id: EventId, ticket_id: TicketId) -> dict[str, Any]:
        """Return provider-specific fields for the ticket edit form."""
        ...

    def get_event_for_ticket(self, candidate_id: int) -> Event | None:
        """Return the event the candidate acts as a ticket for (``Capability.EVENT_LOOKUP``)."""
        raise NotImplementedError(f"{type(self).__name__} does not support event lookup")

    def get_event_reports_link(self, event_id: EventId) -> str | None:
        """Return the attendee report link for an event (``Capability.REPORTS``)."""
        raise NotImplementedError(f"{type(self).__name__} does not support reports")

    def get_ticket_reports_link(self, event_id: EventId, ticket_id: TicketId) -> str | None:
        """Return the attendee report link for one ticket (``Capability.REPORTS``)."""
        raise NotImplementedError(f"{type(self).__name__} does not support reports")
