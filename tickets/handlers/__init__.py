from tickets.handlers.views import (
    CheckinView,
    EventAttendeeListView,
    EventTicketListView,
    TicketDeleteView,
    TicketEditView,
    TicketSubmitView,
    TokenView,
    UncheckinView,
)

__all__ = [
    "CheckinView",
    "EventAttendeeListView",
    "EventTicketListView",
    "TicketDeleteView",
    "TicketEditView",
    "TicketSubmitView",
    "TokenView",
    "UncheckinView",
]
