"""Ticket service - the ticket add/edit/delete workflow.

Services:
- Depend only on interfaces (providers, stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from collections.abc import Mapping
from typing import Any

from tickets import signals
from tickets.domain import Capability, EventId, Ticket, TicketDetail, TicketId
from tickets.domain.errors import (
    EventNotFoundError,
    ProviderExecutionError,
    TicketNotFoundError,
    ValidationError,
)
from tickets.providers.interfaces import TicketProvider
from tickets.providers.registry import ProviderRegistry
from tickets.services.normalization import normalize_ticket
from tickets.stores.interfaces import EventStore

PROVIDER_FIELD = "ticket_provider"


class TicketService:
    """Service for ticket workflow operations."""

    def __init__(self, registry: ProviderRegistry, event_store: EventStore) -> None:
        self._registry = registry
        self._event_store = event_store

    def submit(self, event_id: EventId, raw_fields: Mapping[str, Any]) -> Ticket:
        """Normalize raw ticket fields and hand the ticket to its provider.

        Raises:
            EventNotFoundError: If the event does not exist.
            ValidationError: If the provider field is missing or a field is malformed.
            UnknownProviderError: If the provider key is not registered.
            ProviderExecutionError: If the provider fails to save the ticket.
        """
        self._ensure_event(event_id)

        provider_key = str(raw_fields.get(PROVIDER_FIELD) or "").strip()
        if not provider_key:
            raise ValidationError("Ticket provider is required", field=PROVIDER_FIELD)
        provider = self._registry.resolve(provider_key)

        ticket = normalize_ticket(raw_fields, provider_key)
        if not ticket.name:
            raise ValidationError("Ticket name is required", field="ticket_name")

        saved = provider.save_ticket(event_id, ticket, dict(raw_fields))
        if saved is None or saved.id is None:
            raise ProviderExecutionError("Ticket could not be saved")

        signals.notify(signals.ticket_added, sender=provider_key, event_id=event_id, ticket=saved)
        return saved

    def delete(
        self, event_id: EventId, ticket_id: TicketId, provider_key: str | None = None
    ) -> None:
        """Delete a ticket through its owning provider.

        Raises:
            TicketNotFoundError: If the provider reports no such ticket.
            UnknownProviderError: If ``provider_key`` is given but not registered.
        """
        provider = self._owning_provider(event_id, ticket_id, provider_key)
        if not provider.delete_ticket(event_id, ticket_id):
            raise TicketNotFoundError(ticket_id.value)
        signals.notify(
            signals.ticket_deleted, sender=provider.key, event_id=event_id, ticket_id=ticket_id
        )

    def fetch_for_edit(
        self, event_id: EventId, ticket_id: TicketId, provider_key: str | None = None
    ) -> TicketDetail:
        """Return a ticket plus provider-specific fields for the edit form.

        Raises:
            TicketNotFoundError: If the provider reports no such ticket.
        """
        provider = self._owning_provider(event_id, ticket_id, provider_key)
        ticket = provider.get_ticket(event_id, ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id.value)

        extra_fields = provider.get_extra_fields(event_id, ticket_id) or {}
        reports_link = None
        if provider.supports(Capability.REPORTS):
            reports_link = provider.get_ticket_reports_link(event_id, ticket_id)
        return TicketDetail(ticket=ticket, extra_fields=extra_fields, reports_link=reports_link)

    def _ensure_event(self, event_id: EventId) -> None:
        if not self._event_store.event_exists(event_id):
            raise EventNotFoundError(event_id.value)

    def _owning_provider(
        self, event_id: EventId, ticket_id: TicketId, provider_key: str | None
    ) -> TicketProvider:
        if provider_key:
            return self._registry.resolve(provider_key)
        for _, provider in self._registry.all():
            if provider.get_ticket(event_id, ticket_id) is not None:
                return provider
        raise TicketNotFoundError(ticket_id.value)
