# stands/admin.py

from django.contrib import admin

from stands.models import StandSettings


@admin.register(StandSettings)
class StandSettingsAdmin(admin.ModelAdmin):
    list_display = ("store_name", "stand", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("store_name", "stand__email")
    readonly_fields = ("created_at", "updated_at")
