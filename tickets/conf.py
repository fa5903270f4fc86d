"""App settings, read from ``settings.TICKETS`` with defaults."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Dotted paths of provider classes, registered in this order.
    "PROVIDERS": ["tickets.providers.django_provider.DjangoTicketProvider"],
    "EVENT_STORE": "tickets.stores.django_store.DjangoEventStore",
    "AUTHORIZER": "tickets.authorization.DjangoAuthorizer",
    # Seconds a request token stays valid.
    "TOKEN_MAX_AGE": 60 * 60 * 24,
    # Dispatch action -> Django permission required to run it.
    "PERMISSIONS": {
        "submit-ticket": "tickets.add_ticket",
        "delete-ticket": "tickets.delete_ticket",
        "edit-ticket-fetch": "tickets.change_ticket",
        "checkin": "tickets.change_attendee",
        "uncheckin": "tickets.change_attendee",
        "list-attendees": "tickets.view_attendee",
    },
}


def get_setting(name: str) -> Any:
    user_settings = getattr(settings, "TICKETS", {})
    if name == "PERMISSIONS":
        return {**DEFAULTS["PERMISSIONS"], **user_settings.get("PERMISSIONS", {})}
    return user_settings.get(name, DEFAULTS[name])
