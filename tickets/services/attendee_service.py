"""Attendee service - queries every provider and merges the results.

Providers are visited once each, in registration order, and each
provider's own ordering is kept.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import Any

from tickets import signals
from tickets.domain import (
    Attendee,
    AttendeeId,
    AttendeeSummary,
    Capability,
    Event,
    EventId,
    Ticket,
)
from tickets.domain.errors import ProviderExecutionError, ValidationError
from tickets.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)


class AttendeeService:
    """Service for cross-provider ticket and attendee queries."""

    def __init__(self, registry: ProviderRegistry) -> None:
        self._registry = registry

    def all_tickets(self, event_id: EventId) -> list[Ticket]:
        """Return all tickets for an event from every provider."""
        tickets: list[Ticket] = []
        for _, provider in self._registry.all():
            tickets.extend(provider.get_tickets(event_id))
        return tickets

    def all_attendees(self, event_id: EventId) -> list[Attendee]:
        """Return all attendees for an event from every provider."""
        attendees: list[Attendee] = []
        for _, provider in self._registry.all():
            attendees.extend(provider.get_attendees(event_id))
        return attendees

    def checked_in_count(self, event_id: EventId) -> int:
        return sum(1 for attendee in self.all_attendees(event_id) if attendee.checked_in)

    def summary(self, event_id: EventId) -> AttendeeSummary:
        return AttendeeSummary(event_id=event_id, attendees=tuple(self.all_attendees(event_id)))

    def distinct_prices(self, event_id: EventId, existing_prices: Iterable[Any] = ()) -> list[Decimal]:
        """Add every ticket price of the event that is not already listed.

        Prices compare as exact decimals. Tickets without a price are
        skipped, but an explicit zero price is added.

        Raises:
            ValidationError: If an existing price is not a number.
        """
        prices: list[Decimal] = []
        for value in existing_prices:
            try:
                prices.append(Decimal(str(value)))
            except InvalidOperation:
                raise ValidationError(f"Invalid price {value!r}") from None

        for ticket in self.all_tickets(event_id):
            if ticket.price is None:
                continue
            if ticket.price.amount in prices:
                continue
            prices.append(ticket.price.amount)
        return prices

    def find_owning_event(self, candidate_id: int) -> Event | None:
        """Return the event of the first provider that claims the candidate.

        Providers without event lookup are skipped; later providers are not
        asked once one has matched.
        """
        for key, provider in self._registry.all():
            if not provider.supports(Capability.EVENT_LOOKUP):
                continue
            event = provider.get_event_for_ticket(candidate_id)
            if event is not None:
                logger.debug("Provider %s claims ticket %s", key, candidate_id)
                return event
        return None

    def checkin(self, attendee_id: AttendeeId, provider_key: str) -> None:
        """Check an attendee in through their provider.

        Raises:
            UnknownProviderError: If the provider key is not registered.
            ProviderExecutionError: If the provider reports failure.
        """
        provider = self._registry.resolve(provider_key)
        if not provider.checkin(attendee_id):
            raise ProviderExecutionError()
        signals.notify(signals.attendee_checked_in, sender=provider_key, attendee_id=attendee_id)

    def uncheckin(self, attendee_id: AttendeeId, provider_key: str) -> None:
        """Undo an attendee's check-in through their provider."""
        provider = self._registry.resolve(provider_key)
        if not provider.uncheckin(attendee_id):
            raise ProviderExecutionError()
        signals.notify(signals.attendee_unchecked_in, sender=provider_key, attendee_id=attendee_id)
