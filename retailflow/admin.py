"""
RetailFlow Admin.

- Store, Supplier, Product, StaffProfile: editable
- StockEntry, StockMove, Transfer: read-only (quantities only change via services)
- ProductRequest: approve / reject actions
- Sale, Purchase, Expense, WastageReport: editable bookkeeping
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from retailflow.exceptions import RequestError
from retailflow.models import (
    Expense,
    Product,
    ProductRequest,
    Purchase,
    RequestStatus,
    Sale,
    StaffProfile,
    StockEntry,
    StockMove,
    Store,
    Supplier,
    Transfer,
    WastageItem,
    WastageReport,
)

logger = logging.getLogger(__name__)


class ReadOnlyAdmin(admin.ModelAdmin):
    """No add, change or delete from the admin."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# LOCATIONS & CATALOG
# =========================================================================

@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'is_central', 'is_deleted']
    list_filter = ['is_central', 'is_deleted']
    search_fields = ['name', 'location']
    readonly_fields = ['is_central', 'created_at', 'updated_at']

    def has_delete_permission(self, request, obj=None):
        # Stores are soft-deleted through Locations.delete_store()
        return False


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ['name', 'contact_name', 'phone', 'email']
    search_fields = ['name', 'contact_name', 'email']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'unit', 'cost_price', 'selling_price', 'margin_display',
                    'min_stock_level', 'supplier']
    list_filter = ['unit', 'supplier']
    search_fields = ['name']
    readonly_fields = ['created_at']

    @admin.display(description=_('Margin %'))
    def margin_display(self, obj):
        return f"{obj.margin:.1f}"


@admin.register(StaffProfile)
class StaffProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'role', 'assigned_store']
    list_filter = ['role', 'assigned_store']
    search_fields = ['user__username', 'user__first_name']


# =========================================================================
# LEDGER (read-only)
# =========================================================================

@admin.register(StockEntry)
class StockEntryAdmin(ReadOnlyAdmin):
    """Read-only stock entry admin. Quantity only changes via StockLedger."""

    list_display = ['product', 'store', 'quantity', 'is_low_display', 'updated_at']
    list_filter = ['store']
    search_fields = ['product__name']
    readonly_fields = ['product', 'store', 'quantity', 'created_at', 'updated_at']

    @admin.display(description=_('Low'), boolean=True)
    def is_low_display(self, obj):
        return obj.is_low


@admin.register(StockMove)
class StockMoveAdmin(ReadOnlyAdmin):
    """Immutable audit trail."""

    list_display = ['timestamp', 'entry', 'delta', 'reason', 'user']
    list_filter = ['timestamp', 'user']
    search_fields = ['reason']
    readonly_fields = ['entry', 'delta', 'reason', 'timestamp', 'user']
    date_hierarchy = 'timestamp'


@admin.register(Transfer)
class TransferAdmin(ReadOnlyAdmin):
    """Append-only transfer log."""

    list_display = ['date', 'product', 'quantity', 'from_store', 'to_store', 'user']
    list_filter = ['to_store', 'date']
    search_fields = ['product__name']
    readonly_fields = ['date', 'product', 'quantity', 'from_store', 'to_store', 'user', 'created_at']
    date_hierarchy = 'date'


# =========================================================================
# REQUESTS
# =========================================================================

@admin.register(ProductRequest)
class ProductRequestAdmin(admin.ModelAdmin):
    list_display = ['id', 'date', 'store', 'status', 'item_count', 'has_image']
    list_filter = ['status', 'store']
    readonly_fields = ['status', 'created_by', 'reviewed_by', 'reviewed_at', 'created_at']
    actions = ['approve_requests', 'reject_requests']
    terminal_readonly_fields = ['date', 'store', 'items', 'receipt_image', 'note']

    def get_readonly_fields(self, request, obj=None):
        fields = list(super().get_readonly_fields(request, obj))
        if obj is not None and obj.is_terminal:
            fields += self.terminal_readonly_fields
        return fields

    @admin.display(description=_('Items'))
    def item_count(self, obj):
        return len(obj.items or [])

    @admin.display(description=_('Image'), boolean=True)
    def has_image(self, obj):
        return bool(obj.receipt_image)

    def _review(self, request, queryset, method_name):
        from retailflow.services.requests import RequestWorkflow

        method = getattr(RequestWorkflow, method_name)
        count = 0
        for product_request in queryset.filter(status=RequestStatus.PENDING):
            try:
                method(product_request, user=request.user)
                count += 1
            except RequestError as exc:
                logger.warning("%s: request %s skipped: %s", method_name, product_request.pk, exc)
        return count

    @admin.action(description=_('Approve selected requests'))
    def approve_requests(self, request, queryset):
        count = self._review(request, queryset, 'approve')
        self.message_user(request, _('{count} request(s) approved.').format(count=count))

    @admin.action(description=_('Reject selected requests'))
    def reject_requests(self, request, queryset):
        count = self._review(request, queryset, 'reject')
        self.message_user(request, _('{count} request(s) rejected.').format(count=count))


# =========================================================================
# BOOKKEEPING
# =========================================================================

@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ['date', 'store', 'amount']
    list_filter = ['store']
    date_hierarchy = 'date'


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    list_display = ['date', 'store', 'supplier', 'total_cost', 'is_quick_entry']
    list_filter = ['store', 'is_quick_entry']
    search_fields = ['supplier']
    date_hierarchy = 'date'


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['date', 'store', 'category', 'description', 'amount']
    list_filter = ['store', 'category']
    date_hierarchy = 'date'


class WastageItemInline(admin.TabularInline):
    model = WastageItem
    extra = 0
    readonly_fields = ['total']


@admin.register(WastageReport)
class WastageReportAdmin(admin.ModelAdmin):
    list_display = ['date', 'store', 'responsible', 'total_wastage']
    list_filter = ['store']
    readonly_fields = ['total_wastage']
    inlines = [WastageItemInline]
    date_hierarchy = 'date'

    def save_related(self, request, form, formsets, change):
        from retailflow.services.bookkeeping import Bookkeeping

        super().save_related(request, form, formsets, change)
        Bookkeeping.recompute_wastage_totals(form.instance)
