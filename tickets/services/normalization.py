"""Turns raw ticket form fields into a canonical Ticket.

Field names follow the ticket form: ``ticket_id``, ``ticket_name``,
``ticket_description``, ``ticket_price``, and for each of ``start``/``end`` a
``ticket_<which>_date`` plus optional ``_hour``, ``_minute`` and ``_meridian``.
"""

import re
from collections.abc import Mapping
from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from django.utils import timezone
from django.utils.dateparse import parse_date
from django.utils.html import escape

from tickets.domain import Money, Ticket, TicketId
from tickets.domain.errors import ValidationError

NON_MONEY_CHARS = re.compile(r"[^0-9.]")

# Prices are stored with two decimal places and ten significant digits.
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")


def _text(raw: Mapping[str, Any], name: str) -> str:
    value = raw.get(name)
    if value is None:
        return ""
    return str(value).strip()


def normalize_price(value: Any) -> Money:
    """Strip every non-money character; absent or empty means zero.

    The amount is rounded half-up to cents and must not exceed ``MAX_PRICE``.
    """
    text = "" if value is None else str(value).strip()
    if not text:
        return Money(Decimal("0.00"))
    cleaned = NON_MONEY_CHARS.sub("", text)
    try:
        amount = Decimal(cleaned).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise ValidationError("Ticket price must be a number", field="ticket_price") from None
    if amount > MAX_PRICE:
        raise ValidationError("Ticket price is too large", field="ticket_price")
    return Money(amount)


def normalize_timestamp(raw: Mapping[str, Any], which: str) -> datetime | None:
    """Combine ``ticket_<which>_date`` with its hour/minute/meridian fields.

    Returns None when the date is absent. Missing time parts mean midnight.
    """
    field = f"ticket_{which}_date"
    date_text = _text(raw, field)
    if not date_text:
        return None

    try:
        day = parse_date(date_text)
    except ValueError:
        day = None
    if day is None:
        raise ValidationError(f"Invalid {which} date", field=field)

    hour_text = _text(raw, f"ticket_{which}_hour") or "0"
    minute_text = _text(raw, f"ticket_{which}_minute") or "0"
    meridian = _text(raw, f"ticket_{which}_meridian").lower()
    try:
        hour = int(hour_text)
        minute = int(minute_text)
    except ValueError:
        raise ValidationError(f"Invalid {which} time", field=field) from None

    if meridian:
        if meridian not in ("am", "pm") or not 1 <= hour <= 12:
            raise ValidationError(f"Invalid {which} time", field=field)
        hour = hour % 12 + (12 if meridian == "pm" else 0)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValidationError(f"Invalid {which} time", field=field)

    naive = datetime.combine(day, time(hour, minute))
    return timezone.make_aware(naive)


def normalize_ticket(raw: Mapping[str, Any], provider_key: str) -> Ticket:
    """Build a Ticket from raw form fields.

    Raises:
        ValidationError: If a field is present but malformed.
    """
    ticket_id = None
    id_text = _text(raw, "ticket_id")
    if id_text and id_text != "0":
        try:
            ticket_id = TicketId.from_raw(id_text)
        except ValueError:
            raise ValidationError("Invalid ticket ID", field="ticket_id") from None

    name = _text(raw, "ticket_name")
    description = _text(raw, "ticket_description")
    start_date = normalize_timestamp(raw, "start")
    end_date = normalize_timestamp(raw, "end")
    if start_date and end_date and end_date < start_date:
        raise ValidationError("Ticket end date is before its start date", field="ticket_end_date")

    return Ticket(
        id=ticket_id,
        name=str(escape(name)) if "ticket_name" in raw else None,
        description=str(escape(description)) if "ticket_description" in raw else None,
        price=normalize_price(raw.get("ticket_price")),
        provider_key=provider_key,
        start_date=start_date,
        end_date=end_date,
    )
