"""Transport-independent request dispatch.

A request is validated, then authorized, then executed; any failure on the
way short-circuits into an error envelope. Requests are never retried.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from tickets.authorization import Authorizer
from tickets.domain import AttendeeId, EventId, ProviderKey, TicketId
from tickets.domain.errors import (
    AuthorizationError,
    DomainError,
    ErrorCode,
    ProviderExecutionError,
    UnknownProviderError,
    ValidationError,
)
from tickets.providers.registry import ProviderRegistry
from tickets.services.attendee_service import AttendeeService
from tickets.services.ticket_service import PROVIDER_FIELD, TicketService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    """Uniform response for every dispatched request."""

    success: bool
    data: Any = None
    code: ErrorCode | None = None
    message: str = ""

    @classmethod
    def ok(cls, data: Any) -> "Envelope":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: DomainError) -> "Envelope":
        return cls(success=False, code=error.code, message=error.message)

    def as_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "code": self.code.value, "message": self.message}


@dataclass(frozen=True)
class Operation:
    """One dispatchable action."""

    validate: Callable[[Mapping[str, Any]], dict[str, Any]]
    execute: Callable[..., Any]
    token_action: str | None = None
    resource: str | None = None


class RequestDispatcher:
    """Validates, authorizes and runs ticket requests."""

    def __init__(
        self,
        registry: ProviderRegistry,
        ticket_service: TicketService,
        attendee_service: AttendeeService,
        authorizer: Authorizer,
        permissions: Mapping[str, str],
    ) -> None:
        self._registry = registry
        self._tickets = ticket_service
        self._attendees = attendee_service
        self._authorizer = authorizer
        self._permissions = dict(permissions)
        self._operations = {
            "submit-ticket": Operation(
                self._validate_submit, self._submit, "add_ticket", "event_id"
            ),
            "delete-ticket": Operation(
                self._validate_delete, self._delete, "remove_ticket", "event_id"
            ),
            "edit-ticket-fetch": Operation(
                self._validate_ticket_ref, self._fetch_for_edit, "edit_ticket", "event_id"
            ),
            "checkin": Operation(self._validate_checkin, self._checkin, "checkin", "attendee_id"),
            "uncheckin": Operation(
                self._validate_checkin, self._uncheckin, "uncheckin", "attendee_id"
            ),
            "list-tickets": Operation(self._validate_event, self._list_tickets),
            "list-attendees": Operation(
                self._validate_event, self._list_attendees, resource="event_id"
            ),
        }

    def dispatch(self, action: str, payload: Mapping[str, Any], subject: Any = None) -> Envelope:
        """Run ``action`` for ``subject`` and wrap the outcome in an envelope."""
        try:
            operation = self._operations.get(action)
            if operation is None:
                raise ValidationError(f"Unknown action '{action}'")
            params = operation.validate(payload)
            self._authorize(action, operation, payload, params, subject)
            data = operation.execute(**params)
        except DomainError as error:
            logger.info("Request %s failed: %s", action, error)
            return Envelope.failure(error)
        except Exception:
            logger.exception("Request %s raised an unexpected error", action)
            return Envelope.failure(ProviderExecutionError())
        return Envelope.ok(data)

    def _authorize(
        self,
        action: str,
        operation: Operation,
        payload: Mapping[str, Any],
        params: dict[str, Any],
        subject: Any,
    ) -> None:
        if operation.token_action is not None and not self._authorizer.verify_token(
            subject, payload.get("token"), operation.token_action
        ):
            raise AuthorizationError("Invalid or expired request token")

        permission = self._permissions.get(action)
        if permission is None:
            return
        resource = params.get(operation.resource) if operation.resource else None
        if not self._authorizer.authorize(subject, permission, resource):
            raise AuthorizationError()

    # Validation

    def _validate_event(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return {"event_id": _parse(EventId, payload, "event_id")}

    def _validate_ticket_ref(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        params = self._validate_event(payload)
        params["ticket_id"] = _parse(TicketId, payload, "ticket_id")
        provider_key = payload.get("provider_key")
        params["provider_key"] = self._provider_key(payload) if provider_key else None
        return params

    def _validate_submit(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        params = self._validate_event(payload)
        fields = payload.get("ticket_fields")
        if not isinstance(fields, Mapping):
            raise ValidationError("Missing ticket fields", field="ticket_fields")
        fields = dict(fields)
        if not fields.get(PROVIDER_FIELD) and payload.get("provider_key"):
            fields[PROVIDER_FIELD] = payload["provider_key"]
        params["raw_fields"] = fields
        return params

    def _validate_delete(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        params = self._validate_ticket_ref(payload)
        params["provider_key"] = self._provider_key(payload)
        return params

    def _validate_checkin(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "attendee_id": _parse(AttendeeId, payload, "order_id"),
            "provider_key": self._provider_key(payload),
        }

    def _provider_key(self, payload: Mapping[str, Any]) -> str:
        try:
            key = ProviderKey.from_raw(payload.get("provider_key")).value
        except ValueError:
            raise ValidationError("Missing provider", field="provider_key") from None
        if not self._registry.is_valid(key):
            raise UnknownProviderError(key)
        return key

    # Execution

    def _submit(self, event_id: EventId, raw_fields: dict[str, Any]) -> dict[str, Any]:
        ticket = self._tickets.submit(event_id, raw_fields)
        return {
            "ticket": ticket.as_dict(),
            "tickets": [t.as_dict() for t in self._attendees.all_tickets(event_id)],
        }

    def _delete(self, event_id: EventId, ticket_id: TicketId, provider_key: str) -> dict[str, Any]:
        self._tickets.delete(event_id, ticket_id, provider_key)
        return {
            "remaining_tickets": [t.as_dict() for t in self._attendees.all_tickets(event_id)],
        }

    def _fetch_for_edit(
        self, event_id: EventId, ticket_id: TicketId, provider_key: str | None
    ) -> dict[str, Any]:
        return self._tickets.fetch_for_edit(event_id, ticket_id, provider_key).as_dict()

    def _checkin(self, attendee_id: AttendeeId, provider_key: str) -> dict[str, Any]:
        self._attendees.checkin(attendee_id, provider_key)
        return {"checked_in": True}

    def _uncheckin(self, attendee_id: AttendeeId, provider_key: str) -> dict[str, Any]:
        self._attendees.uncheckin(attendee_id, provider_key)
        return {"checked_in": False}

    def _list_tickets(self, event_id: EventId) -> dict[str, Any]:
        tickets = self._attendees.all_tickets(event_id)
        prices = self._attendees.distinct_prices(event_id)
        return {
            "tickets": [t.as_dict() for t in tickets],
            "prices": [str(price) for price in prices],
        }

    def _list_attendees(self, event_id: EventId) -> dict[str, Any]:
        summary = self._attendees.summary(event_id)
        return {
            "attendees": [a.as_dict() for a in summary.attendees],
            "total": summary.total,
            "checked_in": summary.checked_in,
        }


def _parse(id_type, payload: Mapping[str, Any], name: str):
    value = payload.get(name)
    if value in (None, ""):
        raise ValidationError(f"Missing {name}", field=name)
    try:
        return id_type.from_raw(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}", field=name) from None
