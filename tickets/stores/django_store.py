"""Django ORM implementation of the EventStore."""

from tickets import models
from tickets.domain import Event, EventId
from tickets.stores.interfaces import EventStore


class DjangoEventStore(EventStore):
    """Event store backed by the tickets.Event table."""

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(pk=event_id.value).first()
        if row is None:
            return None
        return Event(id=EventId(row.pk), title=row.title)

    def event_exists(self, event_id: EventId) -> bool:
        return models.Event.objects.filter(pk=event_id.value).exists()
