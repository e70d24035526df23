"""
Warehouse — Valuation Arithmetic Tests

@file warehouse/tests/test_valuation.py
"""

from decimal import Decimal

from warehouse.valuation import (
    format_quantity,
    infer_unit_cost,
    line_total,
    to_decimal,
    valuation_after_issue,
)


class TestToDecimal:
    def test_rounds_half_up(self):
        assert to_decimal('2.345') == Decimal('2.35')
        assert to_decimal('2.344') == Decimal('2.34')

    def test_accepts_int_and_float(self):
        assert to_decimal(10) == Decimal('10.00')
        assert to_decimal(0.1) == Decimal('0.10')


class TestLineTotal:
    def test_rounded_product(self):
        assert line_total(Decimal('10'), Decimal('5.00')) == Decimal('50.00')
        assert line_total(Decimal('3'), Decimal('1.115')) == Decimal('3.35')


class TestInferUnitCost:
    def test_average(self):
        assert infer_unit_cost(Decimal('50.00'), Decimal('10')) == Decimal('5')

    def test_no_stock(self):
        assert infer_unit_cost(Decimal('50.00'), Decimal('0')) == Decimal('0')


class TestValuationAfterIssue:
    def test_weighted_average_decrement(self):
        # 10 on hand worth 50.00, 4 leave: 6 remain worth 30.00
        assert valuation_after_issue(Decimal('50.00'), Decimal('4'), Decimal('6')) == Decimal('30.00')

    def test_removed_amount_is_rounded(self):
        # 3 units worth 10.00 -> one unit is 3.33
        assert valuation_after_issue(Decimal('10.00'), Decimal('1'), Decimal('2')) == Decimal('6.67')

    def test_nothing_left_is_exactly_zero(self):
        assert valuation_after_issue(Decimal('10.00'), Decimal('3'), Decimal('0')) == Decimal('0')

    def test_negative_remaining_is_zero(self):
        assert valuation_after_issue(Decimal('10.00'), Decimal('3'), Decimal('-1')) == Decimal('0')

    def test_stock_in_other_warehouses_counts(self):
        # 20 units across two warehouses worth 100.00, 5 leave one of them
        assert valuation_after_issue(Decimal('100.00'), Decimal('5'), Decimal('15')) == Decimal('75.00')


class TestFormatQuantity:
    def test_whole_numbers_drop_decimals(self):
        assert format_quantity(Decimal('6.00')) == '6'
        assert format_quantity(Decimal('0.00')) == '0'

    def test_fractions_drop_trailing_zeros(self):
        assert format_quantity(Decimal('2.50')) == '2.5'
        assert format_quantity(Decimal('0.25')) == '0.25'
