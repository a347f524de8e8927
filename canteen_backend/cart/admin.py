# cart/admin.py

from django.contrib import admin

from cart.models import Cart, CartItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "stand", "quantity", "price", "subtotal", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("user", "total_items", "total_price", "updated_at")
    search_fields = ("user__email",)
    readonly_fields = ("user", "total_items", "total_price", "created_at", "updated_at")
    inlines = [CartItemInline]
