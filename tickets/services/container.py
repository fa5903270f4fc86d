"""Wires services to the registry built at startup and to the configured stores."""

from django.apps import apps
from django.utils.module_loading import import_string

from tickets.authorization import Authorizer
from tickets.conf import get_setting
from tickets.providers.registry import ProviderRegistry
from tickets.services.attendee_service import AttendeeService
from tickets.services.dispatch import RequestDispatcher
from tickets.services.ticket_service import TicketService


def get_registry() -> ProviderRegistry:
    return apps.get_app_config("tickets").registry


def get_authorizer() -> Authorizer:
    return import_string(get_setting("AUTHORIZER"))()


def get_dispatcher() -> RequestDispatcher:
    registry = get_registry()
    event_store = import_string(get_setting("EVENT_STORE"))()
    return RequestDispatcher(
        registry=registry,
        ticket_service=TicketService(registry, event_store),
        attendee_service=AttendeeService(registry),
        authorizer=get_authorizer(),
        permissions=get_setting("PERMISSIONS"),
    )
