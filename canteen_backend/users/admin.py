# users/admin.py

"""
USERS ADMIN REGISTRATION

Balance is shown read-only: top-ups go through the ledger so every
change has a matching Transaction row.
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from users.models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("email",)
    list_display = ("email", "name", "role", "balance", "is_active")
    list_filter = ("role", "is_staff", "is_active")
    search_fields = ("email", "name", "student_id", "rfid_card")
    readonly_fields = ("balance", "created_at", "updated_at")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "student_id", "phone", "class_name", "rfid_card", "role")}),
        ("Balance", {"fields": ("balance",)}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "name", "password1", "password2", "role", "is_active"),
            },
        ),
    )
