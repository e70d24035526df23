"""
Warehouse — Serializers

Catalogue read/write serializers, the stock ledger view and the movement
payloads. Movement write serializers are plain Serializers: the service
resolves every id and reports unknown ones as 404.

@file warehouse/serializers.py
"""

from rest_framework import serializers

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


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

class WarehouseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Warehouse
        fields = ['id', 'name', 'location', 'manager', 'notes', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class MaterialCategorySerializer(serializers.ModelSerializer):
    materials_count = serializers.IntegerField(source='materials.count', read_only=True)

    class Meta:
        model = MaterialCategory
        fields = ['id', 'name', 'description', 'materials_count', 'created_at', 'updated_at']
        read_only_fields = ['id', 'materials_count', 'created_at', 'updated_at']
        extra_kwargs = {'name': {'validators': []}}


class SupplierSerializer(serializers.ModelSerializer):
    class Meta:
        model = Supplier
        fields = [
            'id', 'name', 'ruc', 'supplier_type', 'phone', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {'ruc': {'validators': []}}

    def validate_ruc(self, value):
        return value or None


class MaterialReadSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True)
    area_name = serializers.CharField(source='area.name', read_only=True, default=None)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    total_stock = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True,
    )
    is_critical = serializers.SerializerMethodField()

    class Meta:
        model = Material
        fields = [
            'id', 'code', 'name', 'description',
            'category', 'category_name', 'area', 'area_name',
            'unit', 'minimum_stock', 'total_stock', 'is_critical',
            'status', 'status_display', 'valuation',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_is_critical(self, obj):
        total = getattr(obj, 'total_stock', None)
        return total is not None and total <= obj.minimum_stock


class MaterialWriteSerializer(serializers.ModelSerializer):
    initial_stock = serializers.DecimalField(
        max_digits=14, decimal_places=2, write_only=True, required=False, min_value=0,
    )
    warehouse = serializers.PrimaryKeyRelatedField(
        queryset=Warehouse.objects.all(), write_only=True, required=False,
    )

    class Meta:
        model = Material
        fields = [
            'code', 'name', 'description', 'category', 'area',
            'unit', 'minimum_stock', 'status', 'valuation',
            'initial_stock', 'warehouse',
        ]
        extra_kwargs = {'code': {'validators': []}}

    def validate(self, attrs):
        if attrs.get('initial_stock') and not attrs.get('warehouse') and not self.instance:
            raise serializers.ValidationError(
                {'warehouse': 'Seleccione el almacén del stock inicial.'},
            )
        return attrs


# ---------------------------------------------------------------------------
# Stock ledger
# ---------------------------------------------------------------------------

class StockEntrySerializer(serializers.ModelSerializer):
    material_code = serializers.CharField(source='material.code', read_only=True)
    material_name = serializers.CharField(source='material.name', read_only=True)
    unit = serializers.CharField(source='material.unit', read_only=True)
    warehouse_name = serializers.CharField(source='warehouse.name', read_only=True)

    class Meta:
        model = StockEntry
        fields = [
            'id', 'material', 'material_code', 'material_name', 'unit',
            'warehouse', 'warehouse_name', 'quantity', 'updated_at',
        ]
        read_only_fields = fields


# ---------------------------------------------------------------------------
# Receipts
# ---------------------------------------------------------------------------

class StockReceiptLineReadSerializer(serializers.ModelSerializer):
    material_name = serializers.CharField(source='material.name', read_only=True)

    class Meta:
        model = StockReceiptLine
        fields = ['id', 'material', 'material_name', 'quantity', 'unit_cost', 'total_cost']
        read_only_fields = fields


class StockReceiptReadSerializer(serializers.ModelSerializer):
    lines = StockReceiptLineReadSerializer(many=True, read_only=True)
    supplier_name = serializers.CharField(source='supplier.name', read_only=True, default=None)
    warehouse_name = serializers.CharField(source='warehouse.name', read_only=True)

    class Meta:
        model = StockReceipt
        fields = [
            'id', 'date', 'receipt_type', 'document',
            'supplier', 'supplier_name', 'warehouse', 'warehouse_name',
            'received_by', 'notes', 'lines', 'created_at',
        ]
        read_only_fields = fields


class ReceiptLineInputSerializer(serializers.Serializer):
    material = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=14, decimal_places=2)
    unit_cost = serializers.DecimalField(max_digits=16, decimal_places=2)


class StockReceiptWriteSerializer(serializers.Serializer):
    warehouse = serializers.UUIDField()
    supplier = serializers.UUIDField(required=False, allow_null=True)
    document = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    receipt_type = serializers.CharField(max_length=30, required=False, default='ingreso')
    received_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    date = serializers.DateTimeField(required=False)
    lines = ReceiptLineInputSerializer(many=True)


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------

class StockIssueLineReadSerializer(serializers.ModelSerializer):
    material_name = serializers.CharField(source='material.name', read_only=True)

    class Meta:
        model = StockIssueLine
        fields = ['id', 'material', 'material_name', 'quantity']
        read_only_fields = fields


class StockIssueReadSerializer(serializers.ModelSerializer):
    lines = StockIssueLineReadSerializer(many=True, read_only=True)
    area_name = serializers.CharField(source='area.name', read_only=True, default=None)
    warehouse_name = serializers.CharField(source='warehouse.name', read_only=True)

    class Meta:
        model = StockIssue
        fields = [
            'id', 'date', 'issue_type', 'area', 'area_name',
            'requested_by', 'authorized_by', 'warehouse', 'warehouse_name',
            'notes', 'lines', 'created_at',
        ]
        read_only_fields = fields


class IssueLineInputSerializer(serializers.Serializer):
    material = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=14, decimal_places=2)


class StockIssueWriteSerializer(serializers.Serializer):
    warehouse = serializers.UUIDField()
    area = serializers.UUIDField(required=False, allow_null=True)
    issue_type = serializers.CharField(max_length=30, required=False, default='salida')
    requested_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    authorized_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    date = serializers.DateTimeField(required=False)
    lines = IssueLineInputSerializer(many=True)


# ---------------------------------------------------------------------------
# EPP deliveries
# ---------------------------------------------------------------------------

class EppDeliveryLineReadSerializer(serializers.ModelSerializer):
    material_name = serializers.CharField(source='material.name', read_only=True)

    class Meta:
        model = EppDeliveryLine
        fields = ['id', 'material', 'material_name', 'quantity', 'size']
        read_only_fields = fields


class EppDeliveryReadSerializer(serializers.ModelSerializer):
    lines = EppDeliveryLineReadSerializer(many=True, read_only=True)
    employee_name = serializers.CharField(source='employee.full_name', read_only=True)
    employee_dni = serializers.CharField(source='employee.dni', read_only=True)
    warehouse_name = serializers.CharField(source='warehouse.name', read_only=True)

    class Meta:
        model = EppDelivery
        fields = [
            'id', 'date', 'employee', 'employee_name', 'employee_dni',
            'warehouse', 'warehouse_name', 'delivered_by', 'signed',
            'notes', 'lines', 'created_at',
        ]
        read_only_fields = fields


class EppLineInputSerializer(serializers.Serializer):
    material = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=14, decimal_places=2)
    size = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')


class EppDeliveryWriteSerializer(serializers.Serializer):
    employee = serializers.UUIDField()
    warehouse = serializers.UUIDField()
    delivered_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    signed = serializers.BooleanField(required=False, default=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    date = serializers.DateTimeField(required=False)
    lines = EppLineInputSerializer(many=True)
