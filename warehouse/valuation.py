"""
Warehouse — Valuation arithmetic

Pure Decimal helpers shared by the movement services and the reports.
Every amount is rounded half-up to two decimals, the precision of the
stored columns.

@file warehouse/valuation.py
"""

from decimal import ROUND_HALF_UP, Decimal

from core.constants import TWO_PLACES, ZERO


def to_decimal(value) -> Decimal:
    """Coerce int / float / str / Decimal to a 2-dp Decimal."""
    dec = value if isinstance(value, Decimal) else Decimal(str(value))
    return dec.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def line_total(quantity, unit_cost) -> Decimal:
    """round(quantity × unit_cost, 2)"""
    return to_decimal(Decimal(quantity) * Decimal(unit_cost))


def infer_unit_cost(valuation, stock_before_removal) -> Decimal:
    """
    Average unit cost implied by a valuation and the stock it covers.

    Unrounded: the rounding happens once, on the amount removed. Zero or
    negative stock yields zero.
    """
    stock = Decimal(stock_before_removal)
    if stock <= 0:
        return ZERO
    return Decimal(valuation) / stock


def valuation_after_issue(valuation, issued, remaining_total) -> Decimal:
    """
    Valuation left after `issued` units leave the site.

    `remaining_total` is the material's stock across every warehouse after
    the decrement. When nothing remains the valuation is exactly zero;
    otherwise the issued units are priced at the inferred unit cost and
    the result never goes below zero.
    """
    remaining = Decimal(remaining_total)
    if remaining <= 0:
        return ZERO
    unit_cost = infer_unit_cost(valuation, remaining + Decimal(issued))
    result = to_decimal(valuation) - to_decimal(Decimal(issued) * unit_cost)
    return max(result, ZERO)


def format_quantity(value) -> str:
    """6.00 -> '6', 2.50 -> '2.5'. Used in user-facing stock messages."""
    dec = Decimal(value)
    if dec == dec.to_integral_value():
        return str(dec.quantize(Decimal(1)))
    return format(dec.normalize(), 'f')
