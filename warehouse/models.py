"""
Warehouse — Models

Catalogue (warehouses, categories, suppliers, materials), the stock
ledger and the movement records.

Stock is a stored balance per (material, warehouse) in StockEntry, kept
in step with the movements by warehouse.services. Material.valuation is
the running total value of the on-hand stock of a material across every
warehouse, not a unit price.

Movement headers and lines are INSERT ONLY. They are written together in
one transaction and never edited; the only removals are the explicit
queryset deletes in the catalogue and EPP services.

@file warehouse/models.py
"""

from decimal import Decimal

from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel, InsertOnlyModel

QUANTITY_FIELD = {'max_digits': 14, 'decimal_places': 2}
MONEY_FIELD = {'max_digits': 16, 'decimal_places': 2}


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

class Warehouse(BaseModel):
    """Physical store (Almacén)."""

    name = models.CharField(_('name'), max_length=120)
    location = models.CharField(_('location'), max_length=200, blank=True, default='')
    manager = models.CharField(_('manager'), max_length=150, blank=True, default='')
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        verbose_name = _('warehouse')
        verbose_name_plural = _('warehouses')
        ordering = ['name']

    def __str__(self):
        return self.name


class MaterialCategory(BaseModel):

    name = models.CharField(_('name'), max_length=100, unique=True)
    description = models.TextField(_('description'), blank=True, default='')

    class Meta:
        verbose_name = _('material category')
        verbose_name_plural = _('material categories')
        ordering = ['name']

    def __str__(self):
        return self.name


class Supplier(BaseModel):
    """Proveedor. `ruc` is the tax id; unique when present."""

    name = models.CharField(_('name'), max_length=200, db_index=True)
    ruc = models.CharField(_('RUC'), max_length=11, unique=True, null=True, blank=True)
    supplier_type = models.CharField(_('type'), max_length=50, blank=True, default='')
    phone = models.CharField(_('phone'), max_length=20, blank=True, default='')
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        verbose_name = _('supplier')
        verbose_name_plural = _('suppliers')
        ordering = ['name']

    def __str__(self):
        return self.name


class Material(BaseModel):
    """
    Stock-keeping item.

    `valuation` grows by quantity × unit cost on every receipt and shrinks
    by the inferred unit cost on every issue. It is forced to zero when the
    last unit leaves the site.
    """

    class StatusChoices(models.TextChoices):
        ACTIVO = 'activo', _('Activo')
        INACTIVO = 'inactivo', _('Inactivo')

    code = models.CharField(_('code'), max_length=50, unique=True)
    name = models.CharField(_('name'), max_length=200, db_index=True)
    description = models.TextField(_('description'), blank=True, default='')
    category = models.ForeignKey(
        MaterialCategory,
        on_delete=models.PROTECT,
        related_name='materials',
        verbose_name=_('category'),
    )
    area = models.ForeignKey(
        'personnel.Area',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='materials',
        verbose_name=_('area'),
    )
    unit = models.CharField(_('unit of measure'), max_length=20, default='UND')
    minimum_stock = models.DecimalField(
        _('minimum stock'), **QUANTITY_FIELD, default=Decimal('0.00'),
    )
    status = models.CharField(
        _('status'), max_length=10,
        choices=StatusChoices.choices, default=StatusChoices.ACTIVO,
        db_index=True,
    )
    valuation = models.DecimalField(
        _('valuation'), **MONEY_FIELD, default=Decimal('0.00'),
        help_text=_('Total value of the on-hand stock across all warehouses.'),
    )

    class Meta:
        verbose_name = _('material')
        verbose_name_plural = _('materials')
        ordering = ['name']
        constraints = [
            models.CheckConstraint(
                condition=Q(valuation__gte=0),
                name='warehouse_material_valuation_gte_0',
            ),
        ]

    def __str__(self):
        return f'{self.code} - {self.name}'


# ---------------------------------------------------------------------------
# Stock ledger
# ---------------------------------------------------------------------------

class StockEntry(BaseModel):
    """On-hand quantity of one material in one warehouse."""

    material = models.ForeignKey(
        Material,
        on_delete=models.PROTECT,
        related_name='stock_entries',
        verbose_name=_('material'),
    )
    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.PROTECT,
        related_name='stock_entries',
        verbose_name=_('warehouse'),
    )
    quantity = models.DecimalField(_('quantity'), **QUANTITY_FIELD, default=Decimal('0.00'))

    class Meta:
        verbose_name = _('stock entry')
        verbose_name_plural = _('stock entries')
        ordering = ['material__name', 'warehouse__name']
        constraints = [
            models.UniqueConstraint(
                fields=['material', 'warehouse'],
                name='warehouse_stock_material_warehouse_uniq',
            ),
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name='warehouse_stock_quantity_gte_0',
            ),
        ]

    def __str__(self):
        return f'{self.material_id}@{self.warehouse_id}: {self.quantity}'


# ---------------------------------------------------------------------------
# Receipts (Ingresos)
# ---------------------------------------------------------------------------

class StockReceipt(InsertOnlyModel):

    date = models.DateTimeField(_('date'), default=timezone.now, db_index=True)
    receipt_type = models.CharField(_('type'), max_length=30, default='ingreso')
    document = models.CharField(_('document'), max_length=100, blank=True, default='')
    supplier = models.ForeignKey(
        Supplier,
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='receipts',
        verbose_name=_('supplier'),
    )
    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.PROTECT,
        related_name='receipts',
        verbose_name=_('warehouse'),
    )
    received_by = models.CharField(_('received by'), max_length=150, blank=True, default='')
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        verbose_name = _('stock receipt')
        verbose_name_plural = _('stock receipts')
        ordering = ['-date']

    def __str__(self):
        return f'Ingreso {self.document or self.pk} ({self.date:%Y-%m-%d})'


class StockReceiptLine(InsertOnlyModel):

    receipt = models.ForeignKey(
        StockReceipt,
        on_delete=models.CASCADE,
        related_name='lines',
        verbose_name=_('receipt'),
    )
    material = models.ForeignKey(
        Material,
        on_delete=models.PROTECT,
        related_name='receipt_lines',
        verbose_name=_('material'),
    )
    quantity = models.DecimalField(_('quantity'), **QUANTITY_FIELD)
    unit_cost = models.DecimalField(_('unit cost'), **MONEY_FIELD)
    total_cost = models.DecimalField(_('total cost'), **MONEY_FIELD)

    class Meta:
        verbose_name = _('stock receipt line')
        verbose_name_plural = _('stock receipt lines')

    def __str__(self):
        return f'{self.material_id} × {self.quantity} @ {self.unit_cost}'


# ---------------------------------------------------------------------------
# Issues (Salidas)
# ---------------------------------------------------------------------------

class StockIssue(InsertOnlyModel):

    date = models.DateTimeField(_('date'), default=timezone.now, db_index=True)
    issue_type = models.CharField(_('type'), max_length=30, default='salida')
    area = models.ForeignKey(
        'personnel.Area',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='stock_issues',
        verbose_name=_('requesting area'),
    )
    requested_by = models.CharField(_('requested by'), max_length=150, blank=True, default='')
    authorized_by = models.CharField(_('authorized by'), max_length=150, blank=True, default='')
    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.PROTECT,
        related_name='issues',
        verbose_name=_('warehouse'),
    )
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        verbose_name = _('stock issue')
        verbose_name_plural = _('stock issues')
        ordering = ['-date']

    def __str__(self):
        return f'Salida {self.pk} ({self.date:%Y-%m-%d})'


class StockIssueLine(InsertOnlyModel):

    issue = models.ForeignKey(
        StockIssue,
        on_delete=models.CASCADE,
        related_name='lines',
        verbose_name=_('issue'),
    )
    material = models.ForeignKey(
        Material,
        on_delete=models.PROTECT,
        related_name='issue_lines',
        verbose_name=_('material'),
    )
    quantity = models.DecimalField(_('quantity'), **QUANTITY_FIELD)

    class Meta:
        verbose_name = _('stock issue line')
        verbose_name_plural = _('stock issue lines')

    def __str__(self):
        return f'{self.material_id} × {self.quantity}'


# ---------------------------------------------------------------------------
# EPP deliveries
# ---------------------------------------------------------------------------

class EppDelivery(InsertOnlyModel):
    """Personal protective equipment handed to an employee."""

    date = models.DateTimeField(_('date'), default=timezone.now, db_index=True)
    employee = models.ForeignKey(
        'personnel.Employee',
        on_delete=models.PROTECT,
        related_name='epp_deliveries',
        verbose_name=_('employee'),
    )
    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.PROTECT,
        related_name='epp_deliveries',
        verbose_name=_('warehouse'),
    )
    delivered_by = models.CharField(_('delivered by'), max_length=150, blank=True, default='')
    signed = models.BooleanField(_('signed'), default=False)
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        verbose_name = _('EPP delivery')
        verbose_name_plural = _('EPP deliveries')
        ordering = ['-date']

    def __str__(self):
        return f'EPP {self.employee_id} ({self.date:%Y-%m-%d})'


class EppDeliveryLine(InsertOnlyModel):

    delivery = models.ForeignKey(
        EppDelivery,
        on_delete=models.CASCADE,
        related_name='lines',
        verbose_name=_('delivery'),
    )
    material = models.ForeignKey(
        Material,
        on_delete=models.PROTECT,
        related_name='epp_lines',
        verbose_name=_('material'),
    )
    quantity = models.DecimalField(_('quantity'), **QUANTITY_FIELD)
    size = models.CharField(_('size'), max_length=20, blank=True, default='')

    class Meta:
        verbose_name = _('EPP delivery line')
        verbose_name_plural = _('EPP delivery lines')

    def __str__(self):
        return f'{self.material_id} × {self.quantity} {self.size}'.rstrip()
