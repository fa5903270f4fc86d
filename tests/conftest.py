"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest
from django.apps import apps
from rest_framework.test import APIClient

from tickets.authorization import Authorizer
from tickets.conf import get_setting
from tickets.providers.memory import InMemoryTicketProvider
from tickets.providers.registry import ProviderRegistry
from tickets.services import AttendeeService, RequestDispatcher, TicketService
from tickets.stores.memory import InMemoryEventStore


class StubAuthorizer(Authorizer):
    """Authorizer whose answers are set by the test and whose calls are recorded."""

    def __init__(self, allow: bool = True, token_ok: bool = True) -> None:
        self.allow = allow
        self.token_ok = token_ok
        self.calls: list[tuple[str, Any]] = []

    def authorize(self, subject, permission, resource=None):
        self.calls.append(("authorize", permission))
        return self.allow

    def make_token(self, subject, action):
        return f"token-{action}"

    def verify_token(self, subject, token, action):
        self.calls.append(("verify_token", action))
        return self.token_ok


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry()


@pytest.fixture
def box_office() -> InMemoryTicketProvider:
    return InMemoryTicketProvider(key="box_office", name="Box office", reports_url="/reports")


@pytest.fixture
def web_shop() -> InMemoryTicketProvider:
    return InMemoryTicketProvider(key="web_shop", name="Web shop", extra_field_names=("ticket_sku",))


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore({1: "Spring concert", 2: "Autumn fair"})


@pytest.fixture
def populated_registry(registry, box_office, web_shop) -> ProviderRegistry:
    registry.register(box_office.key, box_office)
    registry.register(web_shop.key, web_shop)
    return registry


@pytest.fixture
def ticket_service(populated_registry, event_store) -> TicketService:
    return TicketService(populated_registry, event_store)


@pytest.fixture
def attendee_service(populated_registry) -> AttendeeService:
    return AttendeeService(populated_registry)


@pytest.fixture
def authorizer() -> StubAuthorizer:
    return StubAuthorizer()


@pytest.fixture
def dispatcher(populated_registry, ticket_service, attendee_service, authorizer) -> RequestDispatcher:
    return RequestDispatcher(
        registry=populated_registry,
        ticket_service=ticket_service,
        attendee_service=attendee_service,
        authorizer=authorizer,
        permissions=get_setting("PERMISSIONS"),
    )


@pytest.fixture
def app_registry(monkeypatch) -> ProviderRegistry:
    """Replace the startup registry with a fresh one holding the Django provider."""
    from tickets.providers.django_provider import DjangoTicketProvider

    fresh = ProviderRegistry()
    fresh.register(DjangoTicketProvider.key, DjangoTicketProvider())
    monkeypatch.setattr(apps.get_app_config("tickets"), "registry", fresh)
    return fresh
