# ledger/admin.py

from django.contrib import admin

from ledger.models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    View-only ledger for audit visibility.
    Balance changes go through the ledger service, never through admin.
    """

    list_display = ("transaction_number", "user", "type", "amount", "balance_before", "balance_after", "created_at")
    list_filter = ("type", "created_at")
    search_fields = ("transaction_number", "user__email", "description")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
