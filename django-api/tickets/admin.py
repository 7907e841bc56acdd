from django.contrib import admin

from tickets.models import Client, Ticket


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0
    fields = ["status", "price_cents", "created_at"]
    readonly_fields = ["status", "price_cents", "created_at"]
    can_delete = False


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ["name", "user_id", "created_at"]
    search_fields = ["name", "user_id"]
    inlines = [TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["client", "status", "price_cents", "user_id", "created_at"]
    list_filter = ["status"]
    search_fields = ["user_id", "client__name"]
    # Status only moves through the services; the admin must not bypass the state machine.
    readonly_fields = ["id", "public_id", "user_id", "status", "created_at", "updated_at"]
