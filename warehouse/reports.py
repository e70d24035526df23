"""
Warehouse — Inventory Reports

Dashboard summary (cached) and the inventory spreadsheet export.

The summary is cached under SUMMARY_CACHE_KEY for
INVENTORY_SUMMARY_CACHE_SECONDS and dropped on commit of every movement
or catalogue change (see warehouse.services).

@file warehouse/reports.py
"""

import io
import logging
from collections import defaultdict

from django.conf import settings
from django.core.cache import cache
from django.db.models import F, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Font

from core.constants import ZERO

from .models import Material, StockEntry, Warehouse

logger = logging.getLogger('mineops')

SUMMARY_CACHE_KEY = 'warehouse:inventory-summary'
NO_AREA_LABEL = 'Sin Área'
XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
INVENTORY_SHEET = 'Inventario'
INVENTORY_COLUMNS = [
    'Código', 'Nombre', 'Descripción', 'Área', 'Categoría', 'U.M.',
    'Stock Actual', 'Almacén', 'Stock Mínimo', 'Estado', 'Fecha Registro',
]


def invalidate_inventory_summary() -> None:
    cache.delete(SUMMARY_CACHE_KEY)


class InventoryReportService:

    @staticmethod
    def summary() -> dict:
        data = cache.get(SUMMARY_CACHE_KEY)
        if data is None:
            data = InventoryReportService.build_summary()
            cache.set(SUMMARY_CACHE_KEY, data, settings.INVENTORY_SUMMARY_CACHE_SECONDS)
        return data

    @staticmethod
    def build_summary() -> dict:
        """
        Totals for the inventory dashboard:

          total_valuation     sum of every material valuation
          critical_stock      materials whose total stock <= minimum stock
          materials           material count
          warehouses          warehouse count
          valuation_by_group  one row per (area, category), sorted by area
        """
        materials = (
            Material.objects
            .select_related('area', 'category')
            .annotate(total_stock=Coalesce(Sum('stock_entries__quantity'), ZERO))
        )

        groups = defaultdict(lambda: {'items': 0, 'stock': ZERO, 'value': ZERO})
        total_valuation = ZERO
        for material in materials:
            total_valuation += material.valuation
            area_name = material.area.name if material.area_id else NO_AREA_LABEL
            row = groups[(area_name, material.category.name)]
            row['items'] += 1
            row['stock'] += material.total_stock
            row['value'] += material.valuation

        valuation_by_group = [
            {'area': area, 'category': category, **values}
            for (area, category), values in sorted(groups.items())
        ]

        return {
            'total_valuation': total_valuation,
            'critical_stock': materials.filter(total_stock__lte=F('minimum_stock')).count(),
            'materials': len(materials),
            'warehouses': Warehouse.objects.count(),
            'valuation_by_group': valuation_by_group,
        }

    # --- Excel export ---

    @staticmethod
    def inventory_rows():
        """One row per stock entry, in INVENTORY_COLUMNS order."""
        entries = (
            StockEntry.objects
            .select_related('material', 'material__area', 'material__category', 'warehouse')
            .order_by('material__code', 'warehouse__name')
        )
        for entry in entries:
            material = entry.material
            yield [
                material.code,
                material.name,
                material.description,
                material.area.name if material.area_id else NO_AREA_LABEL,
                material.category.name,
                material.unit,
                entry.quantity,
                entry.warehouse.name,
                material.minimum_stock,
                material.get_status_display(),
                timezone.localtime(material.created_at).date(),
            ]

    @staticmethod
    def export_filename() -> str:
        return f'Reporte_Inventario_{timezone.localdate():%Y-%m-%d}.xlsx'

    @staticmethod
    def export_inventory_xlsx() -> bytes:
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = INVENTORY_SHEET
        worksheet.append(INVENTORY_COLUMNS)
        for cell in worksheet[1]:
            cell.font = Font(bold=True)

        count = 0
        for row in InventoryReportService.inventory_rows():
            worksheet.append(row)
            count += 1

        for column in worksheet.columns:
            width = max(len(str(cell.value)) for cell in column if cell.value is not None)
            worksheet.column_dimensions[column[0].column_letter].width = width + 4

        buffer = io.BytesIO()
        workbook.save(buffer)
        logger.info('Inventory export built with %d row(s)', count)
        return buffer.getvalue()
