"""
Warehouse — Report Tests

Dashboard summary, its cache and the inventory spreadsheet.

@file warehouse/tests/test_reports.py
"""

import io
from decimal import Decimal

import pytest
from django.core.cache import cache
from openpyxl import load_workbook

from personnel.services import AreaService
from tests.factories import (
    AreaFactory,
    MaterialCategoryFactory,
    MaterialFactory,
    StockEntryFactory,
    WarehouseFactory,
)
from warehouse.reports import (
    INVENTORY_COLUMNS,
    SUMMARY_CACHE_KEY,
    InventoryReportService,
)
from warehouse.services import StockService


@pytest.fixture
def inventory(db):
    area = AreaFactory(name='Planta')
    category = MaterialCategoryFactory(name='EPP')
    warehouse = WarehouseFactory(name='Central')
    low = MaterialFactory(
        code='EPP-001', name='Guantes', area=area, category=category,
        minimum_stock=Decimal('5'), valuation=Decimal('30.00'),
    )
    ok = MaterialFactory(
        code='EPP-002', name='Botas', area=area, category=category,
        minimum_stock=Decimal('2'), valuation=Decimal('200.00'),
    )
    loose = MaterialFactory(
        code='HER-001', name='Llave', area=None, category=category,
        minimum_stock=Decimal('1'), valuation=Decimal('15.50'),
    )
    StockEntryFactory(material=low, warehouse=warehouse, quantity=Decimal('3'))
    StockEntryFactory(material=ok, warehouse=warehouse, quantity=Decimal('10'))
    StockEntryFactory(material=loose, warehouse=warehouse, quantity=Decimal('4'))
    return {'warehouse': warehouse, 'low': low, 'ok': ok, 'loose': loose}


@pytest.mark.django_db
class TestInventorySummary:
    def test_totals(self, inventory):
        summary = InventoryReportService.build_summary()
        assert summary['total_valuation'] == Decimal('245.50')
        assert summary['critical_stock'] == 1
        assert summary['materials'] == 3
        assert summary['warehouses'] == 1

    def test_valuation_by_group(self, inventory):
        groups = InventoryReportService.build_summary()['valuation_by_group']
        assert groups == [
            {'area': 'Planta', 'category': 'EPP', 'items': 2, 'stock': Decimal('13.00'), 'value': Decimal('230.00')},
            {'area': 'Sin Área', 'category': 'EPP', 'items': 1, 'stock': Decimal('4.00'), 'value': Decimal('15.50')},
        ]

    def test_material_without_stock_is_critical(self):
        MaterialFactory(minimum_stock=Decimal('0'))
        assert InventoryReportService.build_summary()['critical_stock'] == 1

    def test_summary_is_cached(self, inventory):
        first = InventoryReportService.summary()
        assert cache.get(SUMMARY_CACHE_KEY) == first
        MaterialFactory(valuation=Decimal('1000.00'))
        assert InventoryReportService.summary()['total_valuation'] == first['total_valuation']

    def test_movement_commit_drops_cache(self, inventory, django_capture_on_commit_callbacks):
        InventoryReportService.summary()
        with django_capture_on_commit_callbacks(execute=True):
            StockService.register_receipt(
                warehouse_id=inventory['warehouse'].pk,
                lines=[{
                    'material_id': inventory['ok'].pk,
                    'quantity': Decimal('1'),
                    'unit_cost': Decimal('4.50'),
                }],
            )
        assert cache.get(SUMMARY_CACHE_KEY) is None
        assert InventoryReportService.summary()['total_valuation'] == Decimal('250.00')

    def test_area_rename_drops_cache(self, inventory, django_capture_on_commit_callbacks):
        area = inventory['low'].area
        assert InventoryReportService.summary()['valuation_by_group'][0]['area'] == 'Planta'
        with django_capture_on_commit_callbacks(execute=True):
            AreaService.update_area(area_id=area.pk, name='Mina')
        groups = InventoryReportService.summary()['valuation_by_group']
        assert groups[0]['area'] == 'Mina'

    def test_area_delete_drops_cache(self, inventory, django_capture_on_commit_callbacks):
        InventoryReportService.summary()
        with django_capture_on_commit_callbacks(execute=True):
            AreaService.delete_area(area_id=AreaFactory().pk)
        assert cache.get(SUMMARY_CACHE_KEY) is None


@pytest.mark.django_db
class TestInventoryExport:
    def test_filename(self):
        name = InventoryReportService.export_filename()
        assert name.startswith('Reporte_Inventario_')
        assert name.endswith('.xlsx')

    def test_workbook_rows(self, inventory):
        content = InventoryReportService.export_inventory_xlsx()
        sheet = load_workbook(io.BytesIO(content)).active

        assert sheet.title == 'Inventario'
        rows = list(sheet.iter_rows(values_only=True))
        assert list(rows[0]) == INVENTORY_COLUMNS
        assert [row[0] for row in rows[1:]] == ['EPP-001', 'EPP-002', 'HER-001']

        loose = rows[3]
        assert loose[1] == 'Llave'
        assert loose[3] == 'Sin Área'
        assert loose[6] == 4
        assert loose[7] == 'Central'
        assert loose[9] == 'Activo'

    def test_header_is_bold(self, inventory):
        sheet = load_workbook(io.BytesIO(InventoryReportService.export_inventory_xlsx())).active
        assert all(cell.font.bold for cell in sheet[1])

    def test_empty_inventory_has_header_only(self, db):
        sheet = load_workbook(io.BytesIO(InventoryReportService.export_inventory_xlsx())).active
        assert sheet.max_row == 1
