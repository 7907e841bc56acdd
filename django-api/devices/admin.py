from django.contrib import admin

from devices.models import Device, PairingToken


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    list_display = ["label", "user_id", "created_at", "last_seen_at", "revoked_at"]
    list_filter = ["revoked_at"]
    search_fields = ["label", "user_id"]
    exclude = ["token_hash"]
    readonly_fields = ["id", "user_id", "created_at", "last_seen_at"]


@admin.register(PairingToken)
class PairingTokenAdmin(admin.ModelAdmin):
    list_display = ["user_id", "expires_at", "used_at", "created_at"]
    exclude = ["token_hash"]
    readonly_fields = ["user_id", "expires_at", "used_at"]
