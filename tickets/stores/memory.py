from tickets.domain import Event, EventId
from tickets.stores.interfaces import EventStore


class InMemoryEventStore(EventStore):
    """Event store over a fixed dict of events."""

    def __init__(self, events: dict[int, str] | None = None) -> None:
        self._events = {
            event_id: Event(id=EventId(event_id), title=title)
            for event_id, title in (events or {}).items()
        }

    def add(self, event_id: int, title: str = "") -> Event:
        event = Event(id=EventId(event_id), title=title)
        self._events[event_id] = event
        return event

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id.value)

    def event_exists(self, event_id: EventId) -> bool:
        return event_id.value in self._events
