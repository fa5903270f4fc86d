"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call the dispatcher for everything else
- Map domain error codes to HTTP status codes
- Never contain business logic
- Never expose internal error details
"""

from typing import Any

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from tickets.domain.errors import AuthorizationError, ErrorCode, ValidationError
from tickets.handlers.serializers import DispatchRequestSerializer, TokenSerializer
from tickets.services.container import get_authorizer, get_dispatcher
from tickets.services.dispatch import Envelope

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNKNOWN_PROVIDER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PROVIDER_FAILED: status.HTTP_502_BAD_GATEWAY,
}

TOKEN_ACTIONS = ("add_ticket", "remove_ticket", "edit_ticket", "checkin", "uncheckin")


def envelope_response(envelope: Envelope) -> Response:
    if envelope.success:
        return Response(envelope.as_dict(), status=status.HTTP_200_OK)
    code = STATUS_BY_CODE.get(envelope.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(envelope.as_dict(), status=code)


class DispatchView(APIView):
    """Base handler that forwards a request body to one dispatcher action."""

    # Authorization is done by the dispatcher so failures use the envelope.
    permission_classes = [AllowAny]
    action: str = ""

    def run_action(self, request: Request, payload: dict[str, Any]) -> Response:
        envelope = get_dispatcher().dispatch(self.action, payload, subject=request.user)
        return envelope_response(envelope)

    def post(self, request: Request) -> Response:
        serializer = DispatchRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return envelope_response(Envelope.failure(ValidationError("Bad request")))
        return self.run_action(request, serializer.to_payload())


class TicketSubmitView(DispatchView):
    """Handler for POST /api/tickets/submit"""

    action = "submit-ticket"


class TicketDeleteView(DispatchView):
    """Handler for POST /api/tickets/delete"""

    action = "delete-ticket"


class TicketEditView(DispatchView):
    """Handler for POST /api/tickets/edit"""

    action = "edit-ticket-fetch"


class CheckinView(DispatchView):
    """Handler for POST /api/attendees/checkin"""

    action = "checkin"


class UncheckinView(DispatchView):
    """Handler for POST /api/attendees/uncheckin"""

    action = "uncheckin"


class EventTicketListView(DispatchView):
    """Handler for GET /api/events/{event_id}/tickets"""

    action = "list-tickets"

    def get(self, request: Request, event_id: str) -> Response:
        return self.run_action(request, {"event_id": event_id})


class EventAttendeeListView(DispatchView):
    """Handler for GET /api/events/{event_id}/attendees"""

    action = "list-attendees"

    def get(self, request: Request, event_id: str) -> Response:
        return self.run_action(request, {"event_id": event_id})


class TokenView(APIView):
    """Handler for GET /api/tokens/{action}"""

    permission_classes = [AllowAny]

    def get(self, request: Request, action: str) -> Response:
        if action not in TOKEN_ACTIONS:
            return envelope_response(Envelope.failure(ValidationError("Unknown token action")))
        if not request.user.is_authenticated:
            return envelope_response(Envelope.failure(AuthorizationError()))

        token = get_authorizer().make_token(request.user, action)
        serializer = TokenSerializer({"action": action, "token": token})
        return envelope_response(Envelope.ok(serializer.data))
