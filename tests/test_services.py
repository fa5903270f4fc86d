"""Unit tests for TicketService and AttendeeService.

These test the workflow, aggregation and domain error mapping against
in-memory providers.
Run with: pytest tests/test_services.py -v
"""

from decimal import Decimal
from unittest import mock

import pytest

from tickets import signals
from tickets.domain import AttendeeId, Capability, Event, EventId, TicketId
from tickets.domain.errors import (
    EventNotFoundError,
    NotFoundError,
    ProviderExecutionError,
    TicketNotFoundError,
    UnknownProviderError,
    ValidationError,
)
from tickets.providers.memory import InMemoryTicketProvider
from tickets.providers.registry import ProviderRegistry
from tickets.services import AttendeeService, TicketService

EVENT = EventId(1)
OTHER_EVENT = EventId(2)


def fields(**overrides):
    data = {"ticket_provider": "box_office", "ticket_name": "General admission"}
    data.update(overrides)
    return data


class FailingProvider(InMemoryTicketProvider):
    def save_ticket(self, event_id, ticket, raw_data):
        raise ProviderExecutionError("Out of stock")


class TestTicketServiceSubmit:
    """Tests for TicketService.submit."""

    def test_submit_assigns_id_and_normalizes_price(self, ticket_service, box_office):
        ticket = ticket_service.submit(EVENT, fields(ticket_price="$12.50 USD"))

        assert ticket.id is not None
        assert ticket.price.amount == Decimal("12.50")
        assert box_office.get_tickets(EVENT) == [ticket]

    def test_submit_without_price_stores_zero(self, ticket_service):
        ticket = ticket_service.submit(EVENT, fields())

        assert ticket.price.amount == Decimal("0")

    def test_submit_unknown_event_raises_error(self, ticket_service):
        with pytest.raises(EventNotFoundError):
            ticket_service.submit(EventId(99), fields())

    def test_submit_without_provider_raises_validation_error(self, ticket_service):
        with pytest.raises(ValidationError):
            ticket_service.submit(EVENT, {"ticket_name": "GA"})

    def test_submit_unknown_provider_raises_error(self, ticket_service):
        with pytest.raises(UnknownProviderError):
            ticket_service.submit(EVENT, fields(ticket_provider="nope"))

    def test_submit_without_name_raises_validation_error(self, ticket_service):
        with pytest.raises(ValidationError):
            ticket_service.submit(EVENT, fields(ticket_name="  "))

    def test_submit_passes_raw_fields_to_provider(self, ticket_service, web_shop):
        ticket = ticket_service.submit(EVENT, fields(ticket_provider="web_shop", ticket_sku="WS-1"))

        assert web_shop.get_extra_fields(EVENT, ticket.id) == {"ticket_sku": "WS-1"}

    def test_submit_updates_existing_ticket(self, ticket_service, box_office):
        created = ticket_service.submit(EVENT, fields())

        updated = ticket_service.submit(
            EVENT, fields(ticket_id=str(created.id.value), ticket_name="Renamed")
        )

        assert updated.id == created.id
        assert [t.name for t in box_office.get_tickets(EVENT)] == ["Renamed"]

    def test_provider_failure_leaves_no_ticket(self, event_store):
        registry = ProviderRegistry()
        registry.register("box_office", FailingProvider(key="box_office"))
        service = TicketService(registry, event_store)

        with pytest.raises(ProviderExecutionError):
            service.submit(EVENT, fields())

        assert AttendeeService(registry).all_tickets(EVENT) == []

    def test_submit_sends_ticket_added_signal(self, ticket_service):
        received = []

        def receiver(sender, **kwargs):
            received.append((sender, kwargs["event_id"], kwargs["ticket"]))

        signals.ticket_added.connect(receiver)
        try:
            ticket = ticket_service.submit(EVENT, fields())
        finally:
            signals.ticket_added.disconnect(receiver)

        assert received == [("box_office", EVENT, ticket)]

    def test_failed_submit_sends_no_signal(self, ticket_service):
        received = []

        def receiver(sender, **kwargs):
            received.append(sender)

        signals.ticket_added.connect(receiver)
        try:
            with pytest.raises(UnknownProviderError):
                ticket_service.submit(EVENT, fields(ticket_provider="nope"))
        finally:
            signals.ticket_added.disconnect(receiver)

        assert received == []

    def test_failing_receiver_does_not_fail_submit(self, ticket_service, box_office):
        def receiver(sender, **kwargs):
            raise RuntimeError("receiver down")

        signals.ticket_added.connect(receiver)
        try:
            ticket = ticket_service.submit(EVENT, fields())
        finally:
            signals.ticket_added.disconnect(receiver)

        assert box_office.get_tickets(EVENT) == [ticket]

    def test_submit_rounds_price_to_cents(self, ticket_service):
        ticket = ticket_service.submit(EVENT, fields(ticket_price="12.555"))

        assert ticket.price.amount == Decimal("12.56")


class TestTicketServiceDeleteAndEdit:
    """Tests for TicketService.delete and fetch_for_edit."""

    def test_delete_removes_ticket(self, ticket_service, box_office):
        ticket = ticket_service.submit(EVENT, fields())

        ticket_service.delete(EVENT, ticket.id, "box_office")

        assert box_office.get_tickets(EVENT) == []

    def test_delete_missing_ticket_raises_not_found(self, ticket_service):
        with pytest.raises(NotFoundError):
            ticket_service.delete(EVENT, TicketId(404), "box_office")

    def test_delete_finds_owning_provider_without_key(self, ticket_service, web_shop):
        ticket = ticket_service.submit(EVENT, fields(ticket_provider="web_shop"))

        ticket_service.delete(EVENT, ticket.id)

        assert web_shop.get_tickets(EVENT) == []

    def test_delete_ticket_of_other_event_raises_not_found(self, ticket_service):
        ticket = ticket_service.submit(EVENT, fields())

        with pytest.raises(TicketNotFoundError):
            ticket_service.delete(OTHER_EVENT, ticket.id, "box_office")

    def test_fetch_for_edit_includes_extra_fields(self, ticket_service):
        ticket = ticket_service.submit(EVENT, fields(ticket_provider="web_shop", ticket_sku="X"))

        detail = ticket_service.fetch_for_edit(EVENT, ticket.id, "web_shop")

        assert detail.ticket == ticket
        assert detail.extra_fields == {"ticket_sku": "X"}

    def test_fetch_for_edit_includes_reports_link_when_supported(self, ticket_service):
        ticket = ticket_service.submit(EVENT, fields())

        detail = ticket_service.fetch_for_edit(EVENT, ticket.id)

        assert detail.reports_link == f"/reports?event_id=1&ticket_id={ticket.id.value}"

    def test_fetch_for_edit_missing_ticket_raises_not_found(self, ticket_service):
        with pytest.raises(TicketNotFoundError):
            ticket_service.fetch_for_edit(EVENT, TicketId(404), "box_office")


class TestAttendeeAggregation:
    """Tests for AttendeeService aggregation over several providers."""

    def test_all_tickets_concatenates_in_registry_order(
        self, ticket_service, attendee_service, box_office, web_shop
    ):
        web_first = ticket_service.submit(EVENT, fields(ticket_provider="web_shop", ticket_name="W1"))
        box_first = ticket_service.submit(EVENT, fields(ticket_name="B1"))
        web_second = ticket_service.submit(EVENT, fields(ticket_provider="web_shop", ticket_name="W2"))
        ticket_service.submit(OTHER_EVENT, fields(ticket_name="Elsewhere"))

        tickets = attendee_service.all_tickets(EVENT)

        assert [t.name for t in tickets] == ["B1", "W1", "W2"]
        assert len(tickets) == len(box_office.get_tickets(EVENT)) + len(web_shop.get_tickets(EVENT))
        assert tickets[1:] == [web_first, web_second]
        assert tickets[0] == box_first

    def test_all_tickets_with_no_providers_is_empty(self):
        assert AttendeeService(ProviderRegistry()).all_tickets(EVENT) == []

    def test_each_provider_is_queried_once(self, populated_registry, attendee_service):
        spies = []
        for _, provider in populated_registry.all():
            spy = mock.patch.object(provider, "get_attendees", wraps=provider.get_attendees)
            spies.append(spy.start())
        try:
            attendee_service.all_attendees(EVENT)
        finally:
            mock.patch.stopall()

        assert [spy.call_count for spy in spies] == [1, 1]

    def test_checked_in_count_matches_filtered_attendees(
        self, ticket_service, attendee_service, box_office, web_shop
    ):
        box_ticket = ticket_service.submit(EVENT, fields())
        web_ticket = ticket_service.submit(EVENT, fields(ticket_provider="web_shop"))
        first = box_office.sell(EVENT, box_ticket.id, "Ada")
        box_office.sell(EVENT, box_ticket.id, "Grace")
        third = web_shop.sell(EVENT, web_ticket.id, "Linus")
        attendee_service.checkin(first.id, "box_office")
        attendee_service.checkin(third.id, "web_shop")

        attendees = attendee_service.all_attendees(EVENT)

        assert [a.holder_name for a in attendees] == ["Ada", "Grace", "Linus"]
        assert attendee_service.checked_in_count(EVENT) == 2
        assert attendee_service.checked_in_count(EVENT) == sum(1 for a in attendees if a.checked_in)

    def test_checked_in_count_with_no_providers_is_zero(self):
        assert AttendeeService(ProviderRegistry()).checked_in_count(EVENT) == 0

    def test_summary_reports_totals(self, ticket_service, attendee_service, box_office):
        ticket = ticket_service.submit(EVENT, fields())
        attendee = box_office.sell(EVENT, ticket.id)
        box_office.sell(EVENT, ticket.id)
        attendee_service.checkin(attendee.id, "box_office")

        summary = attendee_service.summary(EVENT)

        assert (summary.total, summary.checked_in) == (2, 1)

    def test_distinct_prices_adds_missing_prices_only(self, ticket_service, attendee_service):
        ticket_service.submit(EVENT, fields(ticket_price="10"))
        ticket_service.submit(EVENT, fields(ticket_price="12.50"))
        ticket_service.submit(EVENT, fields(ticket_provider="web_shop", ticket_price="12.5"))
        ticket_service.submit(EVENT, fields(ticket_provider="web_shop"))

        prices = attendee_service.distinct_prices(EVENT, ["10.00"])

        assert prices == [Decimal("10.00"), Decimal("12.50"), Decimal("0")]

    def test_distinct_prices_rejects_non_numeric_existing_price(self, attendee_service):
        with pytest.raises(ValidationError):
            attendee_service.distinct_prices(EVENT, ["ten"])

    def test_find_owning_event_stops_at_first_match(self):
        first = InMemoryTicketProvider(key="first")
        second = InMemoryTicketProvider(key="second")
        third = InMemoryTicketProvider(key="third")
        registry = ProviderRegistry()
        for provider in (first, second, third):
            registry.register(provider.key, provider)
        match = Event(id=EventId(7), title="Gala")
        first.get_event_for_ticket = mock.Mock(return_value=None)
        second.get_event_for_ticket = mock.Mock(return_value=match)
        third.get_event_for_ticket = mock.Mock(return_value=Event(id=EventId(8)))

        result = AttendeeService(registry).find_owning_event(55)

        assert result is match
        first.get_event_for_ticket.assert_called_once_with(55)
        third.get_event_for_ticket.assert_not_called()

    def test_find_owning_event_skips_providers_without_lookup(self):
        class NoLookup(InMemoryTicketProvider):
            capabilities = frozenset({Capability.REPORTS})

        provider = NoLookup(key="no_lookup")
        provider.get_event_for_ticket = mock.Mock()
        registry = ProviderRegistry()
        registry.register("no_lookup", provider)

        assert AttendeeService(registry).find_owning_event(1) is None
        provider.get_event_for_ticket.assert_not_called()

    def test_find_owning_event_returns_event_of_known_ticket(self, ticket_service, attendee_service):
        ticket = ticket_service.submit(OTHER_EVENT, fields(ticket_provider="web_shop"))

        assert attendee_service.find_owning_event(ticket.id.value) == Event(id=OTHER_EVENT)

    def test_checkin_unknown_attendee_raises_provider_error(self, attendee_service):
        with pytest.raises(ProviderExecutionError):
            attendee_service.checkin(AttendeeId(404), "box_office")

    def test_uncheckin_clears_flag(self, ticket_service, attendee_service, box_office):
        ticket = ticket_service.submit(EVENT, fields())
        attendee = box_office.sell(EVENT, ticket.id)
        attendee_service.checkin(attendee.id, "box_office")

        attendee_service.uncheckin(attendee.id, "box_office")

        assert attendee_service.checked_in_count(EVENT) == 0

    def test_failing_receiver_does_not_fail_checkin(
        self, ticket_service, attendee_service, box_office
    ):
        ticket = ticket_service.submit(EVENT, fields())
        attendee = box_office.sell(EVENT, ticket.id)

        def receiver(sender, **kwargs):
            raise RuntimeError("receiver down")

        signals.attendee_checked_in.connect(receiver)
        try:
            attendee_service.checkin(attendee.id, "box_office")
        finally:
            signals.attendee_checked_in.disconnect(receiver)

        assert attendee_service.checked_in_count(EVENT) == 1
