"""
Warehouse — Views

Catalogue CRUD, the stock ledger, movement endpoints and inventory
reports. Every view declares the access-gate section it belongs to;
business rules live in warehouse.services.

@file warehouse/views.py
"""

from django.http import HttpResponse
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from users.access import EPP_PATH, Principal
from users.permissions import IsActiveUser, PathAccessPermission

from .models import (
    EppDelivery,
    MaterialCategory,
    StockEntry,
    StockIssue,
    StockReceipt,
    Supplier,
    Warehouse,
)
from .reports import XLSX_CONTENT_TYPE, InventoryReportService
from .serializers import (
    EppDeliveryReadSerializer,
    EppDeliveryWriteSerializer,
    MaterialCategorySerializer,
    MaterialReadSerializer,
    MaterialWriteSerializer,
    StockEntrySerializer,
    StockIssueReadSerializer,
    StockIssueWriteSerializer,
    StockReceiptReadSerializer,
    StockReceiptWriteSerializer,
    SupplierSerializer,
    WarehouseSerializer,
)
from .services import (
    MOVEMENTS_PATH,
    SUPPLIERS_PATH,
    WAREHOUSE_PATH,
    CatalogService,
    EppDeliveryService,
    StockService,
)

REPORTS_PATH = '/almacen/reportes'


class GatedViewMixin:
    """Access-gate permissions plus the Principal/actor pair for services."""

    permission_classes = [IsActiveUser, PathAccessPermission]

    def service_context(self) -> dict:
        return {
            'principal': Principal.from_user(self.request.user),
            'actor': self.request.user,
        }


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

class WarehouseViewSet(GatedViewMixin, viewsets.ModelViewSet):
    access_path = WAREHOUSE_PATH
    serializer_class = WarehouseSerializer
    queryset = Warehouse.objects.all()
    search_fields = ['name', 'location', 'manager']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def perform_create(self, serializer):
        serializer.instance = CatalogService.create_warehouse(
            **self.service_context(), **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = CatalogService.update_warehouse(
            warehouse_id=self.get_object().pk,
            **self.service_context(), **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        CatalogService.delete_warehouse(warehouse_id=instance.pk, **self.service_context())

    @action(detail=True, methods=['get'], url_path='stock')
    def stock(self, request, pk=None):
        warehouse = self.get_object()
        entries = StockService.entries_for_warehouse(warehouse.pk)
        page = self.paginate_queryset(entries)
        if page is not None:
            return self.get_paginated_response(StockEntrySerializer(page, many=True).data)
        return Response(StockEntrySerializer(entries, many=True).data)


class MaterialCategoryViewSet(GatedViewMixin, viewsets.ModelViewSet):
    access_path = WAREHOUSE_PATH
    serializer_class = MaterialCategorySerializer
    queryset = MaterialCategory.objects.all()
    search_fields = ['name']
    ordering = ['name']

    def perform_create(self, serializer):
        serializer.instance = CatalogService.create_category(
            **self.service_context(), **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = CatalogService.update_category(
            category_id=self.get_object().pk,
            **self.service_context(), **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        CatalogService.delete_category(category_id=instance.pk, **self.service_context())


class SupplierViewSet(GatedViewMixin, viewsets.ModelViewSet):
    access_path = SUPPLIERS_PATH
    serializer_class = SupplierSerializer
    queryset = Supplier.objects.all()
    filterset_fields = ['supplier_type']
    search_fields = ['name', 'ruc']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def perform_create(self, serializer):
        serializer.instance = CatalogService.create_supplier(
            **self.service_context(), **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = CatalogService.update_supplier(
            supplier_id=self.get_object().pk,
            **self.service_context(), **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        CatalogService.delete_supplier(supplier_id=instance.pk, **self.service_context())


class MaterialViewSet(GatedViewMixin, viewsets.ModelViewSet):
    """
    Materials with their stock summed over every warehouse.
    DELETE removes the material and its whole movement history.
    """

    access_path = WAREHOUSE_PATH
    filterset_fields = ['category', 'area', 'status', 'unit']
    search_fields = ['code', 'name', 'description']
    ordering_fields = ['code', 'name', 'valuation', 'total_stock', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return StockService.materials_with_totals().select_related('category', 'area')

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve', 'stock'):
            return MaterialReadSerializer
        return MaterialWriteSerializer

    @staticmethod
    def _service_fields(data: dict) -> dict:
        fields = dict(data)
        if 'category' in fields:
            fields['category_id'] = fields.pop('category').pk
        if 'area' in fields:
            area = fields.pop('area')
            fields['area_id'] = area.pk if area else None
        if 'warehouse' in fields:
            fields['warehouse_id'] = fields.pop('warehouse').pk
        return fields

    def create(self, request, *args, **kwargs):
        serializer = MaterialWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        material = CatalogService.create_material(
            **self.service_context(), **self._service_fields(serializer.validated_data),
        )
        material = self.get_queryset().get(pk=material.pk)
        return Response(MaterialReadSerializer(material).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = MaterialWriteSerializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        fields = self._service_fields(serializer.validated_data)
        fields.pop('initial_stock', None)
        fields.pop('warehouse_id', None)
        CatalogService.update_material(
            material_id=instance.pk, **self.service_context(), **fields,
        )
        material = self.get_queryset().get(pk=instance.pk)
        return Response(MaterialReadSerializer(material).data)

    def perform_destroy(self, instance):
        CatalogService.delete_material(material_id=instance.pk, **self.service_context())

    @action(detail=True, methods=['get'], url_path='stock')
    def stock(self, request, pk=None):
        material = self.get_object()
        entries = StockEntry.objects.filter(material=material).select_related('material', 'warehouse')
        return Response({
            'material': MaterialReadSerializer(material).data,
            'total_stock': StockService.total_for_material(material.pk),
            'entries': StockEntrySerializer(entries, many=True).data,
        })


# ---------------------------------------------------------------------------
# Stock ledger
# ---------------------------------------------------------------------------

class StockEntryViewSet(GatedViewMixin, viewsets.ReadOnlyModelViewSet):
    access_path = WAREHOUSE_PATH
    serializer_class = StockEntrySerializer
    filterset_fields = ['warehouse', 'material', 'material__category']
    search_fields = ['material__code', 'material__name']
    ordering_fields = ['quantity', 'material__name', 'warehouse__name']
    ordering = ['material__name', 'warehouse__name']

    def get_queryset(self):
        return StockEntry.objects.select_related('material', 'warehouse')


# ---------------------------------------------------------------------------
# Movements
# ---------------------------------------------------------------------------

class StockReceiptViewSet(
    GatedViewMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Ingresos. Insert-only: no update, no delete."""

    access_path = MOVEMENTS_PATH
    serializer_class = StockReceiptReadSerializer
    filterset_fields = ['warehouse', 'supplier', 'receipt_type']
    search_fields = ['document', 'received_by', 'notes']
    ordering_fields = ['date', 'created_at']
    ordering = ['-date']

    def get_queryset(self):
        return (
            StockReceipt.objects
            .select_related('warehouse', 'supplier')
            .prefetch_related('lines__material')
        )

    def create(self, request, *args, **kwargs):
        serializer = StockReceiptWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        receipt = StockService.register_receipt(
            warehouse_id=data['warehouse'],
            supplier_id=data.get('supplier'),
            document=data['document'],
            receipt_type=data['receipt_type'],
            received_by=data['received_by'],
            notes=data['notes'],
            date=data.get('date'),
            lines=[
                {'material_id': line['material'], 'quantity': line['quantity'], 'unit_cost': line['unit_cost']}
                for line in data['lines']
            ],
            **self.service_context(),
        )
        return Response(
            StockReceiptReadSerializer(self.get_queryset().get(pk=receipt.pk)).data,
            status=status.HTTP_201_CREATED,
        )


class StockIssueViewSet(
    GatedViewMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Salidas. Insert-only: no update, no delete."""

    access_path = MOVEMENTS_PATH
    serializer_class = StockIssueReadSerializer
    filterset_fields = ['warehouse', 'area', 'issue_type']
    search_fields = ['requested_by', 'authorized_by', 'notes']
    ordering_fields = ['date', 'created_at']
    ordering = ['-date']

    def get_queryset(self):
        return (
            StockIssue.objects
            .select_related('warehouse', 'area')
            .prefetch_related('lines__material')
        )

    def create(self, request, *args, **kwargs):
        serializer = StockIssueWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        issue = StockService.register_issue(
            warehouse_id=data['warehouse'],
            area_id=data.get('area'),
            issue_type=data['issue_type'],
            requested_by=data['requested_by'],
            authorized_by=data['authorized_by'],
            notes=data['notes'],
            date=data.get('date'),
            lines=[
                {'material_id': line['material'], 'quantity': line['quantity']}
                for line in data['lines']
            ],
            **self.service_context(),
        )
        return Response(
            StockIssueReadSerializer(self.get_queryset().get(pk=issue.pk)).data,
            status=status.HTTP_201_CREATED,
        )


class EppDeliveryViewSet(
    GatedViewMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """EPP deliveries. DELETE removes the record but does not return stock."""

    access_path = EPP_PATH
    serializer_class = EppDeliveryReadSerializer
    filterset_fields = ['employee', 'warehouse', 'signed']
    search_fields = ['employee__full_name', 'employee__dni', 'delivered_by']
    ordering_fields = ['date', 'created_at']
    ordering = ['-date']

    def get_queryset(self):
        return (
            EppDelivery.objects
            .select_related('employee', 'warehouse')
            .prefetch_related('lines__material')
        )

    def create(self, request, *args, **kwargs):
        serializer = EppDeliveryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        delivery = EppDeliveryService.register_delivery(
            employee_id=data['employee'],
            warehouse_id=data['warehouse'],
            delivered_by=data['delivered_by'],
            signed=data['signed'],
            notes=data['notes'],
            date=data.get('date'),
            lines=[
                {'material_id': line['material'], 'quantity': line['quantity'], 'size': line['size']}
                for line in data['lines']
            ],
            **self.service_context(),
        )
        return Response(
            EppDeliveryReadSerializer(self.get_queryset().get(pk=delivery.pk)).data,
            status=status.HTTP_201_CREATED,
        )

    def perform_destroy(self, instance):
        EppDeliveryService.delete_delivery(delivery_id=instance.pk, **self.service_context())


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

class InventorySummaryView(GatedViewMixin, APIView):
    """GET /api/v1/warehouse/reports/summary/"""

    access_path = REPORTS_PATH

    def get(self, request):
        return Response(InventoryReportService.summary())


class InventoryExportView(GatedViewMixin, APIView):
    """GET /api/v1/warehouse/reports/inventory-xlsx/ — spreadsheet download."""

    access_path = REPORTS_PATH

    def get(self, request):
        response = HttpResponse(
            InventoryReportService.export_inventory_xlsx(),
            content_type=XLSX_CONTENT_TYPE,
        )
        filename = InventoryReportService.export_filename()
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response
