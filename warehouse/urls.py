"""
Warehouse — URL Configuration

Catalogue, stock ledger, movements and inventory reports under
/api/v1/warehouse/.

@file warehouse/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    EppDeliveryViewSet,
    InventoryExportView,
    InventorySummaryView,
    MaterialCategoryViewSet,
    MaterialViewSet,
    StockEntryViewSet,
    StockIssueViewSet,
    StockReceiptViewSet,
    SupplierViewSet,
    WarehouseViewSet,
)

app_name = 'warehouse'

router = DefaultRouter()
router.register('warehouses', WarehouseViewSet, basename='warehouse')
router.register('categories', MaterialCategoryViewSet, basename='category')
router.register('materials', MaterialViewSet, basename='material')
router.register('suppliers', SupplierViewSet, basename='supplier')
router.register('stock', StockEntryViewSet, basename='stock-entry')
router.register('receipts', StockReceiptViewSet, basename='receipt')
router.register('issues', StockIssueViewSet, basename='issue')
router.register('epp-deliveries', EppDeliveryViewSet, basename='epp-delivery')

urlpatterns = [
    path('reports/summary/', InventorySummaryView.as_view(), name='report-summary'),
    path('reports/inventory-xlsx/', InventoryExportView.as_view(), name='report-inventory-xlsx'),
    path('', include(router.urls)),
]
