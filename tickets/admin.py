from django.contrib import admin

from tickets.models import Attendee, Event, Ticket


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 1
    fields = ["name", "provider", "price", "start_date", "end_date"]


class AttendeeInline(admin.TabularInline):
    model = Attendee
    extra = 0
    fields = ["holder_name", "order_id", "checked_in", "checked_in_at"]
    readonly_fields = ["checked_in_at"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "created_at"]
    search_fields = ["title"]
    inlines = [TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "provider", "price", "start_date", "end_date"]
    list_filter = ["provider", "event"]
    inlines = [AttendeeInline]


@admin.register(Attendee)
class AttendeeAdmin(admin.ModelAdmin):
    list_display = ["holder_name", "order_id", "ticket", "checked_in"]
    list_filter = ["checked_in", "ticket__event"]
    search_fields = ["holder_name", "order_id"]
