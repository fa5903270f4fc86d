from django.urls import path

from tickets.handlers import (
    CheckinView,
    EventAttendeeListView,
    EventTicketListView,
    TicketDeleteView,
    TicketEditView,
    TicketSubmitView,
    TokenView,
    UncheckinView,
)

urlpatterns = [
    path("tickets/submit", TicketSubmitView.as_view(), name="ticket-submit"),
    path("tickets/delete", TicketDeleteView.as_view(), name="ticket-delete"),
    path("tickets/edit", TicketEditView.as_view(), name="ticket-edit"),
    path("attendees/checkin", CheckinView.as_view(), name="attendee-checkin"),
    path("attendees/uncheckin", UncheckinView.as_view(), name="attendee-uncheckin"),
    path(
        "events/<str:event_id>/tickets",
        EventTicketListView.as_view(),
        name="event-ticket-list",
    ),
    path(
        "events/<str:event_id>/attendees",
        EventAttendeeListView.as_view(),
        name="event-attendee-list",
    ),
    path("tokens/<str:action>", TokenView.as_view(), name="request-token"),
]
