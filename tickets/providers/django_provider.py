"""Django ORM implementation of a ticket provider."""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from django.db import DatabaseError, transaction
from django.utils import timezone

from tickets import models
from tickets.domain import (
    Attendee,
    AttendeeId,
    Capability,
    Event,
    EventId,
    Money,
    Ticket,
    TicketId,
)
from tickets.domain.errors import ProviderExecutionError, ValidationError
from tickets.providers.interfaces import TicketProvider

logger = logging.getLogger(__name__)


class DjangoTicketProvider(TicketProvider):
    """Database-backed provider using the Django ORM.

    Rows are scoped by provider key so subclasses with another key share the
    tables without seeing each other's tickets.
    """

    key = "django"
    name = "Django tickets"
    capabilities = frozenset({Capability.EVENT_LOOKUP})

    # Raw form fields copied into Ticket.extra on save.
    extra_field_names: tuple[str, ...] = ("ticket_capacity", "ticket_sku")

    def get_ticket(self, event_id: EventId, ticket_id: TicketId) -> Ticket | None:
        row = self._tickets(event_id).filter(pk=ticket_id.value).first()
        return self._to_ticket(row) if row else None

    def get_tickets(self, event_id: EventId) -> list[Ticket]:
        return [self._to_ticket(row) for row in self._tickets(event_id)]

    def get_attendees(self, event_id: EventId) -> list[Attendee]:
        rows = models.Attendee.objects.select_related("ticket").filter(
            ticket__event_id=event_id.value, ticket__provider=self.key
        )
        return [self._to_attendee(row) for row in rows]

    def save_ticket(
        self, event_id: EventId, ticket: Ticket, raw_data: dict[str, Any]
    ) -> Ticket:
        fields = {
            "name": ticket.name or "",
            "description": ticket.description or "",
            "price": self._column_price(ticket.price),
            "start_date": ticket.start_date,
            "end_date": ticket.end_date,
            "extra": {
                name: raw_data[name] for name in self.extra_field_names if name in raw_data
            },
        }
        try:
            with transaction.atomic():
                if ticket.id is None:
                    row = models.Ticket.objects.create(
                        event_id=event_id.value, provider=self.key, **fields
                    )
                    row.refresh_from_db()
                else:
                    updated = self._tickets(event_id).filter(pk=ticket.id.value).update(**fields)
                    if not updated:
                        raise ProviderExecutionError("Ticket does not belong to this event")
                    row = models.Ticket.objects.get(pk=ticket.id.value)
        except DatabaseError:
            logger.exception("Failed to save ticket for event %s", event_id.value)
            raise ProviderExecutionError("Ticket could not be saved") from None
        return self._to_ticket(row)

    def delete_ticket(self, event_id: EventId, ticket_id: TicketId) -> bool:
        deleted, _ = self._tickets(event_id).filter(pk=ticket_id.value).delete()
        return deleted > 0

    def checkin(self, attendee_id: AttendeeId) -> bool:
        return self._set_checked_in(attendee_id, timezone.now())

    def uncheckin(self, attendee_id: AttendeeId) -> bool:
        return self._set_checked_in(attendee_id, None)

    def get_extra_fields(self, event_id: EventId, ticket_id: TicketId) -> dict[str, Any]:
        row = self._tickets(event_id).filter(pk=ticket_id.value).only("extra").first()
        return dict(row.extra) if row else {}

    def get_event_for_ticket(self, candidate_id: int) -> Event | None:
        row = (
            models.Ticket.objects.select_related("event")
            .filter(pk=candidate_id, provider=self.key)
            .first()
        )
        if row is None:
            return None
        return Event(id=EventId(row.event.pk), title=row.event.title)

    def _tickets(self, event_id: EventId):
        return models.Ticket.objects.filter(event_id=event_id.value, provider=self.key)

    def _column_price(self, price: Money | None) -> Decimal | None:
        if price is None:
            return None
        column = models.Ticket._meta.get_field("price")
        quantum = Decimal(1).scaleb(-column.decimal_places)
        try:
            amount = price.amount.quantize(quantum, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            amount = None
        if amount is None or amount.adjusted() >= column.max_digits - column.decimal_places:
            raise ValidationError("Ticket price is too large", field="ticket_price")
        return amount

    def _set_checked_in(self, attendee_id: AttendeeId, when) -> bool:
        updated = models.Attendee.objects.filter(
            pk=attendee_id.value, ticket__provider=self.key
        ).update(checked_in=when is not None, checked_in_at=when)
        return updated > 0

    def _to_ticket(self, row: models.Ticket) -> Ticket:
        return Ticket(
            id=TicketId(row.pk),
            name=row.name,
            description=row.description,
            price=Money(row.price) if row.price is not None else None,
            provider_key=row.provider,
            start_date=row.start_date,
            end_date=row.end_date,
        )

    def _to_attendee(self, row: models.Attendee) -> Attendee:
        return Attendee(
            id=AttendeeId(row.pk),
            event_id=EventId(row.ticket.event_id),
            ticket_id=TicketId(row.ticket_id),
            provider_key=row.ticket.provider,
            holder_name=row.holder_name,
            order_id=row.order_id,
            checked_in=row.checked_in,
        )
