"""Django ORM models (persistence layer).

These models back the Django ticket provider and event store. Domain logic
lives in domain/models.py.
"""

from django.db import models


class Event(models.Model):
    """Persistence model for events that tickets are attached to."""

    title = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title


class Ticket(models.Model):
    """Persistence model for tickets sold by the Django provider."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="tickets")
    provider = models.CharField(max_length=100)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)
    extra = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["event", "provider"], name="tickets_event_provider_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.price}"


class Attendee(models.Model):
    """Persistence model for a sold ticket."""

    ticket = models.ForeignKey(Ticket, on_delete=models.CASCADE, related_name="attendees")
    holder_name = models.CharField(max_length=255, blank=True, default="")
    order_id = models.CharField(max_length=100, blank=True, default="")
    checked_in = models.BooleanField(default=False)
    checked_in_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.holder_name or self.order_id} ({self.ticket.name})"
