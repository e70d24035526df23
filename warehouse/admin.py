"""
Warehouse — Django Admin Configuration

Catalogue models are editable. Stock entries and movements are
read-only: stock only changes through the movement services.

@file warehouse/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from core.admin import ReadOnlyAdminMixin

from .models import (
    EppDelivery,
    EppDeliveryLine,
    Material,
    MaterialCategory,
    StockEntry,
    StockIssue,
    StockIssueLine,
    StockReceipt,
    StockReceiptLine,
    Supplier,
    Warehouse,
)

AUDIT_READONLY = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ('name', 'location', 'manager', 'created_at')
    search_fields = ('name', 'location', 'manager')
    readonly_fields = AUDIT_READONLY


@admin.register(MaterialCategory)
class MaterialCategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'description')
    search_fields = ('name',)
    readonly_fields = AUDIT_READONLY


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ('name', 'ruc', 'supplier_type', 'phone')
    list_filter = ('supplier_type',)
    search_fields = ('name', 'ruc')
    readonly_fields = AUDIT_READONLY


class StockEntryInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = StockEntry
    extra = 0
    fields = ('warehouse', 'quantity', 'updated_at')
    readonly_fields = fields


@admin.register(Material)
class MaterialAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'category', 'area', 'unit', 'minimum_stock', 'valuation', 'status')
    list_filter = ('status', 'category', 'area')
    search_fields = ('code', 'name', 'description')
    readonly_fields = ('valuation',) + AUDIT_READONLY
    list_select_related = ('category', 'area')
    list_per_page = 50
    inlines = [StockEntryInline]

    fieldsets = (
        (None, {
            'fields': ('id', 'code', 'name', 'description', 'category', 'area'),
        }),
        (_('Stock'), {
            'fields': ('unit', 'minimum_stock', 'status', 'valuation'),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
    )


@admin.register(StockEntry)
class StockEntryAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ('material', 'warehouse', 'quantity', 'updated_at')
    list_filter = ('warehouse',)
    search_fields = ('material__code', 'material__name')
    list_select_related = ('material', 'warehouse')


# ---------------------------------------------------------------------------
# Movements (insert-only)
# ---------------------------------------------------------------------------

class StockReceiptLineInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = StockReceiptLine
    extra = 0
    fields = ('material', 'quantity', 'unit_cost', 'total_cost')
    readonly_fields = fields


@admin.register(StockReceipt)
class StockReceiptAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ('date', 'receipt_type', 'document', 'supplier', 'warehouse', 'received_by')
    list_filter = ('receipt_type', 'warehouse')
    search_fields = ('document', 'received_by', 'supplier__name')
    list_select_related = ('supplier', 'warehouse')
    date_hierarchy = 'date'
    inlines = [StockReceiptLineInline]


class StockIssueLineInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = StockIssueLine
    extra = 0
    fields = ('material', 'quantity')
    readonly_fields = fields


@admin.register(StockIssue)
class StockIssueAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ('date', 'issue_type', 'area', 'warehouse', 'requested_by', 'authorized_by')
    list_filter = ('issue_type', 'warehouse', 'area')
    search_fields = ('requested_by', 'authorized_by')
    list_select_related = ('area', 'warehouse')
    date_hierarchy = 'date'
    inlines = [StockIssueLineInline]


class EppDeliveryLineInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = EppDeliveryLine
    extra = 0
    fields = ('material', 'quantity', 'size')
    readonly_fields = fields


@admin.register(EppDelivery)
class EppDeliveryAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ('date', 'employee', 'warehouse', 'delivered_by', 'signed')
    list_filter = ('signed', 'warehouse')
    search_fields = ('employee__full_name', 'employee__dni', 'delivered_by')
    list_select_related = ('employee', 'warehouse')
    date_hierarchy = 'date'
    inlines = [EppDeliveryLineInline]
