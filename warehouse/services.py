"""
Warehouse — Service Layer

Stock movements (receipts, issues, EPP deliveries) and catalogue
maintenance. Every movement is one all-or-nothing transaction:

  - Material rows are locked first, then StockEntry rows, both in primary
    key order, so concurrent movements on the same material serialise
    instead of deadlocking.
  - Issues and deliveries check every line before the first write; a
    short line raises InsufficientStockError and nothing is changed.
  - Any exception rolls the whole movement back.

Services take a Principal for the access gate (None skips the check,
for internal callers) and the acting user for the audit columns.

@file warehouse/services.py
"""

import logging
import uuid
from collections import OrderedDict
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Sum
from django.db.models.deletion import ProtectedError
from django.db.models.functions import Coalesce

from core.constants import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_UPDATE,
    ZERO,
)
from core.db import apply_transaction_timeouts
from core.exceptions import (
    BusinessRuleViolation,
    DuplicateResourceError,
    InsufficientStockError,
    ReferentialIntegrityError,
    ResourceNotFoundError,
)
from core.services import AuditService
from personnel.models import Area, Employee
from users.access import EPP_PATH, Principal, require_edit

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
from .reports import invalidate_inventory_summary
from .valuation import format_quantity, line_total, to_decimal, valuation_after_issue

logger = logging.getLogger('mineops')

WAREHOUSE_PATH = '/almacen'
MOVEMENTS_PATH = '/almacen/movimientos'
SUPPLIERS_PATH = '/proveedores'

UNSTOCKED_VALUATION_MESSAGE = 'Un material sin stock no puede tener valorización.'


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _get_or_404(model, pk, label: str):
    try:
        return model.objects.get(pk=pk)
    except (model.DoesNotExist, DjangoValidationError, ValueError):
        raise ResourceNotFoundError(detail=f'{label} {pk} no encontrado.')


def _material_key(value) -> str:
    try:
        return str(value if isinstance(value, uuid.UUID) else uuid.UUID(str(value)))
    except ValueError:
        raise ResourceNotFoundError(detail=f'Material {value} no encontrado.')


def _positive_quantity(value) -> Decimal:
    quantity = to_decimal(value)
    if quantity <= 0:
        raise BusinessRuleViolation(detail='La cantidad debe ser mayor que cero.')
    return quantity


def _require_lines(lines) -> None:
    if not lines:
        raise BusinessRuleViolation(detail='El movimiento debe tener al menos un detalle.')


def _lock_materials(material_ids) -> dict:
    """Lock the Material rows in pk order. Unknown ids raise ResourceNotFoundError."""
    wanted = sorted({_material_key(mid) for mid in material_ids})
    materials = {
        str(material.pk): material
        for material in Material.objects.select_for_update().filter(pk__in=wanted).order_by('pk')
    }
    missing = [mid for mid in wanted if mid not in materials]
    if missing:
        raise ResourceNotFoundError(detail=f'Material {missing[0]} no encontrado.')
    return materials


def _prepare_outgoing(lines) -> list[tuple[str, Decimal, dict]]:
    """Validated (material_id, quantity, raw line) for each outgoing line."""
    return [
        (_material_key(line['material_id']), _positive_quantity(line['quantity']), line)
        for line in lines
    ]


def _sum_by_material(prepared) -> OrderedDict:
    """Requested quantity per material; repeated materials are added up."""
    totals: OrderedDict = OrderedDict()
    for material_id, quantity, _ in prepared:
        totals[material_id] = totals.get(material_id, ZERO) + quantity
    return totals


def _take_stock(*, warehouse: Warehouse, requested: dict, materials: dict) -> None:
    """
    Decrement StockEntry rows for `requested` in `warehouse`.

    All entries are locked and checked before the first decrement; a
    missing entry counts as zero on hand.
    """
    entries = {
        str(entry.material_id): entry
        for entry in (
            StockEntry.objects
            .select_for_update()
            .filter(warehouse=warehouse, material_id__in=list(requested))
            .order_by('material_id')
        )
    }

    for material_id, quantity in requested.items():
        entry = entries.get(material_id)
        on_hand = entry.quantity if entry is not None else ZERO
        if on_hand < quantity:
            raise InsufficientStockError(
                material_name=materials[material_id].name,
                available=format_quantity(on_hand),
            )

    for material_id, quantity in requested.items():
        entry = entries[material_id]
        entry.quantity = to_decimal(entry.quantity - quantity)
        entry.save(update_fields=['quantity', 'updated_at'])


def total_stock(material_id) -> Decimal:
    """Stock of a material summed across every warehouse."""
    return StockEntry.objects.filter(material_id=material_id).aggregate(
        total=Coalesce(Sum('quantity'), ZERO),
    )['total']


# ---------------------------------------------------------------------------
# Receipts and issues
# ---------------------------------------------------------------------------

class StockService:
    """Ingresos and Salidas."""

    @staticmethod
    @transaction.atomic
    def register_receipt(
        *,
        warehouse_id,
        lines: list[dict],
        supplier_id=None,
        document: str = '',
        received_by: str = '',
        notes: str = '',
        receipt_type: str = 'ingreso',
        date=None,
        principal: Principal | None = None,
        actor=None,
    ) -> StockReceipt:
        """
        Record an Ingreso. Each line is {material_id, quantity, unit_cost}.

        For every line the material valuation grows by round(q × c, 2) and
        the (material, warehouse) stock entry grows by q, created if absent.
        Submitting the same receipt twice records two movements.
        """
        require_edit(principal, MOVEMENTS_PATH)
        _require_lines(lines)
        apply_transaction_timeouts()

        warehouse = _get_or_404(Warehouse, warehouse_id, 'Almacén')
        supplier = _get_or_404(Supplier, supplier_id, 'Proveedor') if supplier_id else None

        prepared = []
        for line in lines:
            quantity = _positive_quantity(line['quantity'])
            unit_cost = to_decimal(line.get('unit_cost', ZERO))
            if unit_cost < 0:
                raise BusinessRuleViolation(detail='El costo unitario no puede ser negativo.')
            prepared.append((_material_key(line['material_id']), quantity, unit_cost))

        materials = _lock_materials(mid for mid, _, _ in prepared)

        header_fields = {
            'receipt_type': receipt_type or 'ingreso',
            'document': document,
            'supplier': supplier,
            'warehouse': warehouse,
            'received_by': received_by,
            'notes': notes,
            'created_by': actor,
        }
        if date is not None:
            header_fields['date'] = date
        receipt = StockReceipt.objects.create(**header_fields)

        StockReceiptLine.objects.bulk_create([
            StockReceiptLine(
                receipt=receipt,
                material=materials[material_id],
                quantity=quantity,
                unit_cost=unit_cost,
                total_cost=line_total(quantity, unit_cost),
                created_by=actor,
            )
            for material_id, quantity, unit_cost in prepared
        ])

        for material_id, quantity, unit_cost in sorted(prepared, key=lambda item: item[0]):
            material = materials[material_id]
            material.valuation = to_decimal(material.valuation + line_total(quantity, unit_cost))
            material._current_user = actor
            material.save(update_fields=['valuation', 'updated_at'])

            entry, _ = StockEntry.objects.select_for_update().get_or_create(
                material=material, warehouse=warehouse,
                defaults={'quantity': ZERO, 'created_by': actor},
            )
            entry.quantity = to_decimal(entry.quantity + quantity)
            entry.save(update_fields=['quantity', 'updated_at'])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='StockReceipt',
            object_id=str(receipt.pk),
            new_values={
                'warehouse': str(warehouse.pk),
                'supplier': str(supplier.pk) if supplier else None,
                'document': document,
                'lines': [
                    {'material': mid, 'quantity': str(q), 'unit_cost': str(c)}
                    for mid, q, c in prepared
                ],
            },
        )
        transaction.on_commit(invalidate_inventory_summary)
        logger.info(
            'Receipt %s registered: %d line(s) into warehouse %s',
            receipt.pk, len(prepared), warehouse.pk,
        )
        return receipt

    @staticmethod
    @transaction.atomic
    def register_issue(
        *,
        warehouse_id,
        lines: list[dict],
        area_id=None,
        requested_by: str = '',
        authorized_by: str = '',
        notes: str = '',
        issue_type: str = 'salida',
        date=None,
        principal: Principal | None = None,
        actor=None,
    ) -> StockIssue:
        """
        Record a Salida. Each line is {material_id, quantity}.

        Stock is checked for every line before anything is written. The
        valuation of each material drops by the issued quantity priced at
        the unit cost inferred from the stock before the issue, and is
        zeroed when no stock is left in any warehouse.
        """
        require_edit(principal, MOVEMENTS_PATH)
        _require_lines(lines)
        apply_transaction_timeouts()

        warehouse = _get_or_404(Warehouse, warehouse_id, 'Almacén')
        area = _get_or_404(Area, area_id, 'Área') if area_id else None

        prepared = _prepare_outgoing(lines)
        requested = _sum_by_material(prepared)
        materials = _lock_materials(requested)
        _take_stock(warehouse=warehouse, requested=requested, materials=materials)

        for material_id in sorted(requested):
            material = materials[material_id]
            material.valuation = valuation_after_issue(
                material.valuation, requested[material_id], total_stock(material_id),
            )
            material._current_user = actor
            material.save(update_fields=['valuation', 'updated_at'])

        header_fields = {
            'issue_type': issue_type or 'salida',
            'area': area,
            'requested_by': requested_by,
            'authorized_by': authorized_by,
            'warehouse': warehouse,
            'notes': notes,
            'created_by': actor,
        }
        if date is not None:
            header_fields['date'] = date
        issue = StockIssue.objects.create(**header_fields)

        StockIssueLine.objects.bulk_create([
            StockIssueLine(
                issue=issue,
                material=materials[material_id],
                quantity=quantity,
                created_by=actor,
            )
            for material_id, quantity, _ in prepared
        ])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='StockIssue',
            object_id=str(issue.pk),
            new_values={
                'warehouse': str(warehouse.pk),
                'area': str(area.pk) if area else None,
                'lines': [{'material': mid, 'quantity': str(q)} for mid, q in requested.items()],
            },
        )
        transaction.on_commit(invalidate_inventory_summary)
        logger.info(
            'Issue %s registered: %d material(s) out of warehouse %s',
            issue.pk, len(requested), warehouse.pk,
        )
        return issue

    # --- Queries ---

    @staticmethod
    def entries_for_warehouse(warehouse_id):
        return (
            StockEntry.objects
            .filter(warehouse_id=warehouse_id)
            .select_related('material', 'material__category', 'warehouse')
        )

    @staticmethod
    def total_for_material(material_id) -> Decimal:
        return total_stock(material_id)

    @staticmethod
    def materials_with_totals():
        """Materials annotated with `total_stock` across all warehouses."""
        return Material.objects.annotate(
            total_stock=Coalesce(Sum('stock_entries__quantity'), ZERO),
        )


# ---------------------------------------------------------------------------
# EPP deliveries
# ---------------------------------------------------------------------------

class EppDeliveryService:
    """
    Protective equipment handed to employees. Stock leaves the source
    warehouse but the material valuation is left untouched.
    """

    @staticmethod
    @transaction.atomic
    def register_delivery(
        *,
        employee_id,
        warehouse_id,
        lines: list[dict],
        delivered_by: str = '',
        signed: bool = False,
        notes: str = '',
        date=None,
        principal: Principal | None = None,
        actor=None,
    ) -> EppDelivery:
        """Each line is {material_id, quantity, size?}."""
        require_edit(principal, EPP_PATH)
        _require_lines(lines)
        apply_transaction_timeouts()

        employee = _get_or_404(Employee, employee_id, 'Empleado')
        if employee.status == Employee.StatusChoices.INACTIVO:
            raise BusinessRuleViolation(detail='No se puede entregar EPP a un empleado inactivo.')
        warehouse = _get_or_404(Warehouse, warehouse_id, 'Almacén')

        prepared = _prepare_outgoing(lines)
        requested = _sum_by_material(prepared)
        materials = _lock_materials(requested)
        _take_stock(warehouse=warehouse, requested=requested, materials=materials)

        header_fields = {
            'employee': employee,
            'warehouse': warehouse,
            'delivered_by': delivered_by,
            'signed': signed,
            'notes': notes,
            'created_by': actor,
        }
        if date is not None:
            header_fields['date'] = date
        delivery = EppDelivery.objects.create(**header_fields)

        EppDeliveryLine.objects.bulk_create([
            EppDeliveryLine(
                delivery=delivery,
                material=materials[material_id],
                quantity=quantity,
                size=line.get('size') or '',
                created_by=actor,
            )
            for material_id, quantity, line in prepared
        ])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='EppDelivery',
            object_id=str(delivery.pk),
            new_values={
                'employee': str(employee.pk),
                'warehouse': str(warehouse.pk),
                'lines': [{'material': mid, 'quantity': str(q)} for mid, q in requested.items()],
            },
        )
        transaction.on_commit(invalidate_inventory_summary)
        logger.info('EPP delivery %s registered for employee %s', delivery.pk, employee.dni)
        return delivery

    @staticmethod
    @transaction.atomic
    def delete_delivery(*, delivery_id, principal: Principal | None = None, actor=None) -> None:
        """Remove a delivery and its lines. Delivered stock is NOT returned."""
        require_edit(principal, EPP_PATH)
        delivery = _get_or_404(EppDelivery, delivery_id, 'Entrega EPP')
        old_values = {
            'employee': str(delivery.employee_id),
            'warehouse': str(delivery.warehouse_id),
            'lines': [
                {'material': str(mid), 'quantity': str(q)}
                for mid, q in delivery.lines.values_list('material_id', 'quantity')
            ],
        }

        EppDeliveryLine.objects.filter(delivery_id=delivery.pk).delete()
        EppDelivery.objects.filter(pk=delivery.pk).delete()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='EppDelivery',
            object_id=str(delivery_id),
            old_values=old_values,
        )
        logger.info('EPP delivery %s deleted', delivery_id)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

class CatalogService:
    """Materials, categories, warehouses and suppliers."""

    @staticmethod
    def _audit(action, instance, actor, old_values=None, new_values=None):
        AuditService.log(
            actor=actor,
            action=action,
            model_name=type(instance).__name__,
            object_id=str(instance.pk),
            old_values=old_values,
            new_values=new_values,
        )

    # --- Materials ---

    @staticmethod
    @transaction.atomic
    def create_material(
        *,
        code: str,
        name: str,
        category_id,
        area_id=None,
        valuation=None,
        initial_stock=None,
        warehouse_id=None,
        principal: Principal | None = None,
        actor=None,
        **fields,
    ) -> Material:
        """
        Create a material. A positive `initial_stock` together with a
        `warehouse_id` opens its stock entry in the same transaction.
        """
        require_edit(principal, WAREHOUSE_PATH)
        if Material.objects.filter(code=code).exists():
            raise DuplicateResourceError(detail=f"El código '{code}' ya está en uso.")

        category = _get_or_404(MaterialCategory, category_id, 'Categoría')
        area = _get_or_404(Area, area_id, 'Área') if area_id else None

        material = Material(
            code=code,
            name=name,
            category=category,
            area=area,
            valuation=to_decimal(valuation or ZERO),
            created_by=actor,
            **fields,
        )
        if material.valuation < 0:
            raise BusinessRuleViolation(detail='La valorización no puede ser negativa.')

        opens_stock = initial_stock is not None and to_decimal(initial_stock) > 0 and bool(warehouse_id)
        if material.valuation > 0 and not opens_stock:
            raise BusinessRuleViolation(detail=UNSTOCKED_VALUATION_MESSAGE)
        material._current_user = actor
        material.save()

        if opens_stock:
            warehouse = _get_or_404(Warehouse, warehouse_id, 'Almacén')
            StockEntry.objects.create(
                material=material,
                warehouse=warehouse,
                quantity=to_decimal(initial_stock),
                created_by=actor,
            )

        transaction.on_commit(invalidate_inventory_summary)
        return material

    @staticmethod
    @transaction.atomic
    def update_material(
        *,
        material_id,
        principal: Principal | None = None,
        actor=None,
        **fields,
    ) -> Material:
        require_edit(principal, WAREHOUSE_PATH)
        try:
            material = Material.objects.select_for_update().get(pk=material_id)
        except (Material.DoesNotExist, DjangoValidationError, ValueError):
            raise ResourceNotFoundError(detail=f'Material {material_id} no encontrado.')

        code = fields.get('code')
        if code and Material.objects.filter(code=code).exclude(pk=material.pk).exists():
            raise DuplicateResourceError(detail=f"El código '{code}' ya está en uso.")

        if 'category_id' in fields:
            material.category = _get_or_404(MaterialCategory, fields.pop('category_id'), 'Categoría')
        if 'area_id' in fields:
            area_id = fields.pop('area_id')
            material.area = _get_or_404(Area, area_id, 'Área') if area_id else None
        if fields.get('valuation') is not None:
            fields['valuation'] = to_decimal(fields['valuation'])
            if fields['valuation'] < 0:
                raise BusinessRuleViolation(detail='La valorización no puede ser negativa.')
            # Re-sending the current value is allowed: EPP deliveries drain stock, not valuation.
            if (
                fields['valuation'] > 0
                and fields['valuation'] != material.valuation
                and total_stock(material.pk) == 0
            ):
                raise BusinessRuleViolation(detail=UNSTOCKED_VALUATION_MESSAGE)

        for attr, value in fields.items():
            setattr(material, attr, value)
        material.updated_by = actor
        material._current_user = actor
        material.save()

        transaction.on_commit(invalidate_inventory_summary)
        return material

    @staticmethod
    @transaction.atomic
    def delete_material(*, material_id, principal: Principal | None = None, actor=None) -> None:
        """
        Delete a material together with its whole history: EPP lines,
        issue lines, receipt lines and stock entries, then the material.
        Movement headers stay.
        """
        require_edit(principal, WAREHOUSE_PATH)
        apply_transaction_timeouts()
        try:
            material = Material.objects.select_for_update().get(pk=material_id)
        except (Material.DoesNotExist, DjangoValidationError, ValueError):
            raise ResourceNotFoundError(detail=f'Material {material_id} no encontrado.')
        old_values = AuditService.snapshot(material)

        removed = {
            'epp_lines': EppDeliveryLine.objects.filter(material=material).delete()[0],
            'issue_lines': StockIssueLine.objects.filter(material=material).delete()[0],
            'receipt_lines': StockReceiptLine.objects.filter(material=material).delete()[0],
            'stock_entries': StockEntry.objects.filter(material=material).delete()[0],
        }
        Material.objects.filter(pk=material.pk).delete()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='Material',
            object_id=str(material_id),
            old_values={**old_values, 'removed': removed},
        )
        transaction.on_commit(invalidate_inventory_summary)
        logger.info('Material %s deleted with its history %s', old_values['code'], removed)

    # --- Categories ---

    @staticmethod
    @transaction.atomic
    def create_category(*, name: str, description: str = '', principal: Principal | None = None, actor=None):
        require_edit(principal, WAREHOUSE_PATH)
        if MaterialCategory.objects.filter(name__iexact=name).exists():
            raise DuplicateResourceError(detail=f"La categoría '{name}' ya existe.")
        category = MaterialCategory.objects.create(name=name, description=description, created_by=actor)
        CatalogService._audit(AUDIT_ACTION_CREATE, category, actor, new_values=AuditService.snapshot(category))
        return category

    @staticmethod
    @transaction.atomic
    def update_category(*, category_id, principal: Principal | None = None, actor=None, **fields):
        require_edit(principal, WAREHOUSE_PATH)
        category = _get_or_404(MaterialCategory, category_id, 'Categoría')
        name = fields.get('name')
        if name and MaterialCategory.objects.filter(name__iexact=name).exclude(pk=category.pk).exists():
            raise DuplicateResourceError(detail=f"La categoría '{name}' ya existe.")
        return CatalogService._update(category, fields, actor)

    @staticmethod
    @transaction.atomic
    def delete_category(*, category_id, principal: Principal | None = None, actor=None) -> None:
        require_edit(principal, WAREHOUSE_PATH)
        category = _get_or_404(MaterialCategory, category_id, 'Categoría')
        CatalogService._delete(
            category, actor,
            'No se puede eliminar la categoría: tiene materiales asociados.',
        )

    # --- Warehouses ---

    @staticmethod
    @transaction.atomic
    def create_warehouse(*, name: str, principal: Principal | None = None, actor=None, **fields):
        require_edit(principal, WAREHOUSE_PATH)
        warehouse = Warehouse.objects.create(name=name, created_by=actor, **fields)
        CatalogService._audit(AUDIT_ACTION_CREATE, warehouse, actor, new_values=AuditService.snapshot(warehouse))
        return warehouse

    @staticmethod
    @transaction.atomic
    def update_warehouse(*, warehouse_id, principal: Principal | None = None, actor=None, **fields):
        require_edit(principal, WAREHOUSE_PATH)
        warehouse = _get_or_404(Warehouse, warehouse_id, 'Almacén')
        return CatalogService._update(warehouse, fields, actor)

    @staticmethod
    @transaction.atomic
    def delete_warehouse(*, warehouse_id, principal: Principal | None = None, actor=None) -> None:
        require_edit(principal, WAREHOUSE_PATH)
        warehouse = _get_or_404(Warehouse, warehouse_id, 'Almacén')
        CatalogService._delete(
            warehouse, actor,
            'No se puede eliminar el almacén: tiene materiales en stock o historial de movimientos vinculados.',
        )

    # --- Suppliers ---

    @staticmethod
    def _check_ruc(ruc, exclude_pk=None):
        if not ruc:
            return None
        qs = Supplier.objects.filter(ruc=ruc)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        if qs.exists():
            raise DuplicateResourceError(detail=f"El RUC '{ruc}' ya está registrado.")
        return ruc

    @staticmethod
    @transaction.atomic
    def create_supplier(*, name: str, ruc=None, principal: Principal | None = None, actor=None, **fields):
        require_edit(principal, SUPPLIERS_PATH)
        supplier = Supplier.objects.create(
            name=name, ruc=CatalogService._check_ruc(ruc), created_by=actor, **fields,
        )
        CatalogService._audit(AUDIT_ACTION_CREATE, supplier, actor, new_values=AuditService.snapshot(supplier))
        return supplier

    @staticmethod
    @transaction.atomic
    def update_supplier(*, supplier_id, principal: Principal | None = None, actor=None, **fields):
        require_edit(principal, SUPPLIERS_PATH)
        supplier = _get_or_404(Supplier, supplier_id, 'Proveedor')
        if 'ruc' in fields:
            fields['ruc'] = CatalogService._check_ruc(fields['ruc'], exclude_pk=supplier.pk)
        return CatalogService._update(supplier, fields, actor)

    @staticmethod
    @transaction.atomic
    def delete_supplier(*, supplier_id, principal: Principal | None = None, actor=None) -> None:
        require_edit(principal, SUPPLIERS_PATH)
        supplier = _get_or_404(Supplier, supplier_id, 'Proveedor')
        CatalogService._delete(
            supplier, actor,
            'No se puede eliminar el proveedor: tiene ingresos registrados.',
        )

    # --- Generic update / delete ---

    @staticmethod
    def _update(instance, fields, actor):
        old_values = AuditService.snapshot(instance)
        for attr, value in fields.items():
            setattr(instance, attr, value)
        instance.updated_by = actor
        instance.save()
        CatalogService._audit(
            AUDIT_ACTION_UPDATE, instance, actor,
            old_values=old_values, new_values=AuditService.snapshot(instance),
        )
        transaction.on_commit(invalidate_inventory_summary)
        return instance

    @staticmethod
    def _delete(instance, actor, refused_message: str) -> None:
        pk = instance.pk
        old_values = AuditService.snapshot(instance)
        try:
            instance.delete()
        except ProtectedError:
            raise ReferentialIntegrityError(detail=refused_message)
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name=type(instance).__name__,
            object_id=str(pk),
            old_values=old_values,
        )
        transaction.on_commit(invalidate_inventory_summary)
        logger.info('%s %s deleted', type(instance).__name__, instance)
