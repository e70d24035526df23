"""
Warehouse — Service Tests

Receipts, issues and EPP deliveries against the stock ledger and the
material valuation, plus catalogue maintenance.

@file warehouse/tests/test_services.py
"""

from decimal import Decimal

import pytest

from core.exceptions import (
    AccessDeniedError,
    BusinessRuleViolation,
    DuplicateResourceError,
    InsufficientStockError,
    ReferentialIntegrityError,
    ResourceNotFoundError,
)
from core.models import AuditLog
from personnel.models import Employee
from tests.factories import (
    AreaFactory,
    EmployeeFactory,
    MaterialCategoryFactory,
    MaterialFactory,
    StockEntryFactory,
    SupplierFactory,
    UserFactory,
    WarehouseFactory,
)
from users.access import Principal
from warehouse.models import (
    EppDelivery,
    EppDeliveryLine,
    Material,
    StockEntry,
    StockIssue,
    StockIssueLine,
    StockReceipt,
    StockReceiptLine,
)
from warehouse.services import CatalogService, EppDeliveryService, StockService


def stock_of(material, warehouse):
    entry = StockEntry.objects.filter(material=material, warehouse=warehouse).first()
    return entry.quantity if entry else Decimal('0.00')


def receive(material, warehouse, quantity, unit_cost, **kwargs):
    return StockService.register_receipt(
        warehouse_id=warehouse.pk,
        lines=[{'material_id': material.pk, 'quantity': quantity, 'unit_cost': unit_cost}],
        **kwargs,
    )


def issue(material, warehouse, quantity, **kwargs):
    return StockService.register_issue(
        warehouse_id=warehouse.pk,
        lines=[{'material_id': material.pk, 'quantity': quantity}],
        **kwargs,
    )


@pytest.fixture
def material(db):
    return MaterialFactory(name='Casco minero')


@pytest.fixture
def warehouse(db):
    return WarehouseFactory(name='Almacén Central')


# ---------------------------------------------------------------------------
# Receipts
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestRegisterReceipt:
    def test_receipt_adds_stock_and_valuation(self, material, warehouse):
        receipt = receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        material.refresh_from_db()
        assert material.valuation == Decimal('50.00')
        assert stock_of(material, warehouse) == Decimal('10.00')
        line = receipt.lines.get()
        assert line.total_cost == Decimal('50.00')

    def test_receipt_into_existing_entry(self, material, warehouse):
        StockEntryFactory(material=material, warehouse=warehouse, quantity=Decimal('4'))
        receive(material, warehouse, Decimal('6'), Decimal('2.00'))
        assert stock_of(material, warehouse) == Decimal('10.00')
        assert StockEntry.objects.filter(material=material).count() == 1

    def test_same_receipt_twice_records_two_movements(self, material, warehouse):
        receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        material.refresh_from_db()
        assert StockReceipt.objects.count() == 2
        assert stock_of(material, warehouse) == Decimal('20.00')
        assert material.valuation == Decimal('100.00')

    def test_header_fields(self, material, warehouse):
        supplier = SupplierFactory()
        actor = UserFactory()
        receipt = receive(
            material, warehouse, Decimal('1'), Decimal('3.50'),
            supplier_id=supplier.pk, document='F001-000123', received_by='J. Quispe', actor=actor,
        )
        assert receipt.receipt_type == 'ingreso'
        assert receipt.supplier == supplier
        assert receipt.created_by == actor
        assert AuditLog.objects.filter(model_name='StockReceipt', object_id=str(receipt.pk)).exists()

    def test_bad_line_rolls_back_everything(self, material, warehouse):
        other = MaterialFactory()
        with pytest.raises(BusinessRuleViolation):
            StockService.register_receipt(
                warehouse_id=warehouse.pk,
                lines=[
                    {'material_id': material.pk, 'quantity': Decimal('5'), 'unit_cost': Decimal('1')},
                    {'material_id': other.pk, 'quantity': Decimal('5'), 'unit_cost': Decimal('-1')},
                ],
            )
        material.refresh_from_db()
        assert StockReceipt.objects.count() == 0
        assert material.valuation == Decimal('0.00')
        assert stock_of(material, warehouse) == Decimal('0.00')

    def test_unknown_material(self, warehouse):
        with pytest.raises(ResourceNotFoundError):
            StockService.register_receipt(
                warehouse_id=warehouse.pk,
                lines=[{
                    'material_id': '00000000-0000-0000-0000-000000000000',
                    'quantity': Decimal('1'),
                    'unit_cost': Decimal('1'),
                }],
            )
        assert StockReceipt.objects.count() == 0

    def test_zero_quantity_rejected(self, material, warehouse):
        with pytest.raises(BusinessRuleViolation):
            receive(material, warehouse, Decimal('0'), Decimal('1.00'))

    def test_empty_receipt_rejected(self, warehouse):
        with pytest.raises(BusinessRuleViolation):
            StockService.register_receipt(warehouse_id=warehouse.pk, lines=[])

    def test_manager_cannot_receive(self, material, warehouse):
        with pytest.raises(AccessDeniedError):
            receive(material, warehouse, Decimal('1'), Decimal('1'), principal=Principal(role='gerente'))


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestRegisterIssue:
    def test_issue_decrements_stock_and_valuation(self, material, warehouse):
        receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        issue(material, warehouse, Decimal('4'))
        material.refresh_from_db()
        assert stock_of(material, warehouse) == Decimal('6.00')
        assert material.valuation == Decimal('30.00')

    def test_insufficient_stock_aborts(self, material, warehouse):
        receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        issue(material, warehouse, Decimal('4'))

        with pytest.raises(InsufficientStockError) as excinfo:
            issue(material, warehouse, Decimal('10'))

        error = excinfo.value
        assert error.material_name == 'Casco minero'
        assert error.available == '6'
        assert str(error.detail) == 'Stock insuficiente para "Casco minero". Disponible: 6'
        material.refresh_from_db()
        assert stock_of(material, warehouse) == Decimal('6.00')
        assert material.valuation == Decimal('30.00')
        assert StockIssue.objects.count() == 1

    def test_no_entry_counts_as_zero(self, material, warehouse):
        with pytest.raises(InsufficientStockError) as excinfo:
            issue(material, warehouse, Decimal('1'))
        assert excinfo.value.available == '0'

    def test_checks_every_line_before_writing(self, material, warehouse):
        short = MaterialFactory(name='Guantes')
        receive(material, warehouse, Decimal('10'), Decimal('1.00'))
        receive(short, warehouse, Decimal('1'), Decimal('1.00'))

        with pytest.raises(InsufficientStockError) as excinfo:
            StockService.register_issue(
                warehouse_id=warehouse.pk,
                lines=[
                    {'material_id': material.pk, 'quantity': Decimal('5')},
                    {'material_id': short.pk, 'quantity': Decimal('2')},
                ],
            )
        assert excinfo.value.material_name == 'Guantes'
        assert stock_of(material, warehouse) == Decimal('10.00')
        assert StockIssueLine.objects.count() == 0

    def test_repeated_material_lines_are_added_up(self, material, warehouse):
        receive(material, warehouse, Decimal('6'), Decimal('1.00'))
        with pytest.raises(InsufficientStockError):
            StockService.register_issue(
                warehouse_id=warehouse.pk,
                lines=[
                    {'material_id': material.pk, 'quantity': Decimal('3')},
                    {'material_id': material.pk, 'quantity': Decimal('4')},
                ],
            )
        assert stock_of(material, warehouse) == Decimal('6.00')

    def test_issuing_everything_zeroes_valuation(self, material, warehouse):
        receive(material, warehouse, Decimal('3'), Decimal('3.33'))
        issue(material, warehouse, Decimal('3'))
        material.refresh_from_db()
        assert material.valuation == Decimal('0.00')

    def test_average_uses_stock_in_all_warehouses(self, material, warehouse):
        other = WarehouseFactory()
        receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        receive(material, other, Decimal('10'), Decimal('5.00'))
        issue(material, warehouse, Decimal('5'))
        material.refresh_from_db()
        assert material.valuation == Decimal('75.00')
        assert stock_of(material, other) == Decimal('10.00')

    def test_issue_records_area_and_lines(self, material, warehouse):
        area = AreaFactory(name='Mina Subterránea')
        receive(material, warehouse, Decimal('5'), Decimal('2.00'))
        movement = issue(
            material, warehouse, Decimal('2'),
            area_id=area.pk, requested_by='Supervisor', authorized_by='Jefe de guardia',
        )
        assert movement.issue_type == 'salida'
        assert movement.area == area
        assert movement.lines.get().quantity == Decimal('2.00')

    def test_stored_lines_match_checked_quantities(self, material, warehouse):
        receive(material, warehouse, Decimal('10'), Decimal('1.00'))
        movement = StockService.register_issue(
            warehouse_id=warehouse.pk,
            lines=[
                {'material_id': str(material.pk), 'quantity': '1.5'},
                {'material_id': material.pk, 'quantity': 2},
            ],
        )
        quantities = sorted(line.quantity for line in movement.lines.all())
        assert quantities == [Decimal('1.50'), Decimal('2.00')]
        assert stock_of(material, warehouse) == Decimal('10.00') - sum(quantities)

    def test_warehouse_keeper_may_issue(self, material, warehouse):
        receive(material, warehouse, Decimal('5'), Decimal('2.00'))
        issue(material, warehouse, Decimal('1'), principal=Principal(role='almacenero'))
        assert stock_of(material, warehouse) == Decimal('4.00')


# ---------------------------------------------------------------------------
# EPP deliveries
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestEppDelivery:
    def deliver(self, employee, material, warehouse, quantity, **kwargs):
        return EppDeliveryService.register_delivery(
            employee_id=employee.pk,
            warehouse_id=warehouse.pk,
            lines=[{'material_id': material.pk, 'quantity': quantity, 'size': 'M'}],
            **kwargs,
        )

    def test_delivery_takes_stock_but_keeps_valuation(self, material, warehouse):
        employee = EmployeeFactory()
        receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        delivery = self.deliver(employee, material, warehouse, Decimal('2'), signed=True)

        material.refresh_from_db()
        assert stock_of(material, warehouse) == Decimal('8.00')
        assert material.valuation == Decimal('50.00')
        assert delivery.lines.get().size == 'M'
        assert delivery.signed is True

    def test_repeated_lines_keep_their_sizes(self, material, warehouse):
        employee = EmployeeFactory()
        receive(material, warehouse, Decimal('5'), Decimal('5.00'))
        delivery = EppDeliveryService.register_delivery(
            employee_id=employee.pk,
            warehouse_id=warehouse.pk,
            lines=[
                {'material_id': material.pk, 'quantity': '1', 'size': 'M'},
                {'material_id': str(material.pk), 'quantity': 2, 'size': 'L'},
            ],
        )
        stored = sorted((line.size, line.quantity) for line in delivery.lines.all())
        assert stored == [('L', Decimal('2.00')), ('M', Decimal('1.00'))]
        assert stock_of(material, warehouse) == Decimal('2.00')

    def test_insufficient_stock(self, material, warehouse):
        employee = EmployeeFactory()
        receive(material, warehouse, Decimal('1'), Decimal('5.00'))
        with pytest.raises(InsufficientStockError):
            self.deliver(employee, material, warehouse, Decimal('2'))
        assert EppDelivery.objects.count() == 0

    def test_inactive_employee(self, material, warehouse):
        employee = EmployeeFactory(status=Employee.StatusChoices.INACTIVO)
        receive(material, warehouse, Decimal('5'), Decimal('5.00'))
        with pytest.raises(BusinessRuleViolation):
            self.deliver(employee, material, warehouse, Decimal('1'))

    def test_delete_does_not_return_stock(self, material, warehouse):
        employee = EmployeeFactory()
        receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        delivery = self.deliver(employee, material, warehouse, Decimal('2'))

        EppDeliveryService.delete_delivery(delivery_id=delivery.pk)

        assert not EppDelivery.objects.filter(pk=delivery.pk).exists()
        assert EppDeliveryLine.objects.count() == 0
        assert stock_of(material, warehouse) == Decimal('8.00')

    def test_warehouse_keeper_may_deliver(self, material, warehouse):
        employee = EmployeeFactory()
        receive(material, warehouse, Decimal('5'), Decimal('5.00'))
        self.deliver(employee, material, warehouse, Decimal('1'), principal=Principal(role='almacenero'))
        assert stock_of(material, warehouse) == Decimal('4.00')

    def test_logistics_cannot_deliver(self, material, warehouse):
        employee = EmployeeFactory()
        with pytest.raises(AccessDeniedError):
            self.deliver(employee, material, warehouse, Decimal('1'), principal=Principal(role='logistica'))


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestCatalogService:
    def test_create_material_with_initial_stock(self, warehouse):
        category = MaterialCategoryFactory()
        material = CatalogService.create_material(
            code='EPP-001',
            name='Lentes de seguridad',
            category_id=category.pk,
            unit='PAR',
            initial_stock=Decimal('12'),
            warehouse_id=warehouse.pk,
        )
        assert material.unit == 'PAR'
        assert stock_of(material, warehouse) == Decimal('12.00')
        assert AuditLog.objects.filter(model_name='Material', action='CREATE').exists()

    def test_create_material_with_valuation_and_stock(self, warehouse):
        material = CatalogService.create_material(
            code='EPP-002',
            name='Botas',
            category_id=MaterialCategoryFactory().pk,
            valuation=Decimal('50'),
            initial_stock=Decimal('5'),
            warehouse_id=warehouse.pk,
        )
        assert material.valuation == Decimal('50.00')

    def test_create_material_valuation_without_stock(self):
        category = MaterialCategoryFactory()
        with pytest.raises(BusinessRuleViolation):
            CatalogService.create_material(
                code='EPP-003', name='Arnés', category_id=category.pk, valuation=Decimal('50'),
            )
        assert not Material.objects.filter(code='EPP-003').exists()

    def test_update_valuation_without_stock(self, material):
        with pytest.raises(BusinessRuleViolation):
            CatalogService.update_material(material_id=material.pk, valuation=Decimal('50'))
        material.refresh_from_db()
        assert material.valuation == Decimal('0.00')

    def test_update_valuation_with_stock(self, material, warehouse):
        StockEntryFactory(material=material, warehouse=warehouse, quantity=Decimal('4'))
        CatalogService.update_material(material_id=material.pk, valuation=Decimal('20'))
        material.refresh_from_db()
        assert material.valuation == Decimal('20.00')

    def test_update_keeps_valuation_after_epp_drains_stock(self, material, warehouse):
        receive(material, warehouse, Decimal('2'), Decimal('5.00'))
        EppDeliveryService.register_delivery(
            employee_id=EmployeeFactory().pk,
            warehouse_id=warehouse.pk,
            lines=[{'material_id': material.pk, 'quantity': Decimal('2')}],
        )
        CatalogService.update_material(
            material_id=material.pk, name='Casco minero blanco', valuation=Decimal('10.00'),
        )
        material.refresh_from_db()
        assert material.name == 'Casco minero blanco'
        assert material.valuation == Decimal('10.00')

    def test_duplicate_code(self):
        existing = MaterialFactory(code='EPP-001')
        with pytest.raises(DuplicateResourceError) as excinfo:
            CatalogService.create_material(
                code='EPP-001', name='Otro', category_id=existing.category_id,
            )
        assert str(excinfo.value.detail) == "El código 'EPP-001' ya está en uso."

    def test_update_material_area(self, material):
        area = AreaFactory()
        CatalogService.update_material(material_id=material.pk, area_id=area.pk, minimum_stock=Decimal('3'))
        material.refresh_from_db()
        assert material.area == area
        assert material.minimum_stock == Decimal('3.00')

    def test_delete_material_removes_history(self, material, warehouse):
        employee = EmployeeFactory()
        receive(material, warehouse, Decimal('10'), Decimal('5.00'))
        issue(material, warehouse, Decimal('2'))
        EppDeliveryService.register_delivery(
            employee_id=employee.pk,
            warehouse_id=warehouse.pk,
            lines=[{'material_id': material.pk, 'quantity': Decimal('1')}],
        )

        CatalogService.delete_material(material_id=material.pk)

        assert not Material.objects.filter(pk=material.pk).exists()
        assert StockEntry.objects.count() == 0
        assert StockReceiptLine.objects.count() == 0
        assert StockIssueLine.objects.count() == 0
        assert EppDeliveryLine.objects.count() == 0
        assert StockReceipt.objects.count() == 1
        assert AuditLog.objects.filter(model_name='Material', action='DELETE').exists()

    def test_delete_category_in_use(self, material):
        with pytest.raises(ReferentialIntegrityError):
            CatalogService.delete_category(category_id=material.category_id)

    def test_delete_empty_category(self):
        category = MaterialCategoryFactory()
        CatalogService.delete_category(category_id=category.pk)
        assert AuditLog.objects.filter(model_name='MaterialCategory', action='DELETE').exists()

    def test_delete_warehouse_with_stock(self, material, warehouse):
        StockEntryFactory(material=material, warehouse=warehouse, quantity=Decimal('1'))
        with pytest.raises(ReferentialIntegrityError):
            CatalogService.delete_warehouse(warehouse_id=warehouse.pk)

    def test_duplicate_supplier_ruc(self):
        SupplierFactory(ruc='20123456789')
        with pytest.raises(DuplicateResourceError):
            CatalogService.create_supplier(name='Ferretería Andina', ruc='20123456789')

    def test_supplier_without_ruc(self):
        first = CatalogService.create_supplier(name='Proveedor A', ruc='')
        second = CatalogService.create_supplier(name='Proveedor B')
        assert first.ruc is None
        assert second.ruc is None

    def test_delete_supplier_with_receipts(self, material, warehouse):
        supplier = SupplierFactory()
        receive(material, warehouse, Decimal('1'), Decimal('1.00'), supplier_id=supplier.pk)
        with pytest.raises(ReferentialIntegrityError):
            CatalogService.delete_supplier(supplier_id=supplier.pk)

    def test_manager_cannot_create_material(self):
        category = MaterialCategoryFactory()
        with pytest.raises(AccessDeniedError):
            CatalogService.create_material(
                code='X-1', name='X', category_id=category.pk, principal=Principal(role='gerencia'),
            )


@pytest.mark.django_db
class TestStockQueries:
    def test_materials_with_totals(self, material, warehouse):
        StockEntryFactory(material=material, warehouse=warehouse, quantity=Decimal('3'))
        StockEntryFactory(material=material, quantity=Decimal('4'))
        empty = MaterialFactory()
        totals = {m.pk: m.total_stock for m in StockService.materials_with_totals()}
        assert totals[material.pk] == Decimal('7.00')
        assert totals[empty.pk] == Decimal('0')
        assert StockService.total_for_material(material.pk) == Decimal('7.00')
