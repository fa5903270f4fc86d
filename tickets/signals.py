"""Signals sent after ticket workflow operations succeed.

Receivers observe; errors they raise are logged and never fail the
operation that sent them.
"""

import logging

from django.dispatch import Signal, receiver

logger = logging.getLogger(__name__)

# sender=provider key, kwargs: event_id, ticket
ticket_added = Signal()
# sender=provider key, kwargs: event_id, ticket_id
ticket_deleted = Signal()
# sender=provider key, kwargs: attendee_id
attendee_checked_in = Signal()
attendee_unchecked_in = Signal()


def notify(signal: Signal, sender: str, **kwargs) -> None:
    """Send ``signal`` to every receiver, logging receivers that raise."""
    for handler, result in signal.send_robust(sender=sender, **kwargs):
        if isinstance(result, Exception):
            logger.error(
                "Signal receiver %r failed for %s", handler, sender, exc_info=result
            )


@receiver(ticket_added)
def log_ticket_added(sender, event_id, ticket, **kwargs):
    logger.info("Ticket %s saved for event %s by %s", ticket.id.value, event_id.value, sender)


@receiver(ticket_deleted)
def log_ticket_deleted(sender, event_id, ticket_id, **kwargs):
    logger.info("Ticket %s deleted from event %s by %s", ticket_id.value, event_id.value, sender)


@receiver([attendee_checked_in, attendee_unchecked_in])
def log_checkin_change(sender, attendee_id, signal, **kwargs):
    state = "checked in" if signal is attendee_checked_in else "unchecked"
    logger.info("Attendee %s %s via %s", attendee_id.value, state, sender)
