from tickets.services.attendee_service import AttendeeService
from tickets.services.dispatch import Envelope, RequestDispatcher
from tickets.services.ticket_service import TicketService

__all__ = [
    "AttendeeService",
    "Envelope",
    "RequestDispatcher",
    "TicketService",
]
