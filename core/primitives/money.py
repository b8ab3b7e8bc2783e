"""
ERP Core Primitives — Money
===========================
Fixed-point helpers. Money has two decimal places, stock quantities three.
Rounding is ROUND_HALF_UP everywhere.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

MONEY_PLACES = Decimal("0.01")
QUANTITY_PLACES = Decimal("0.001")


def quantize_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def quantize_quantity(value: Decimal) -> Decimal:
    return Decimal(value).quantize(QUANTITY_PLACES, rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, rate_percent: Decimal) -> Decimal:
    """rate_percent of amount, rounded to money precision."""
    return quantize_money(Decimal(amount) * Decimal(rate_percent) / HUNDRED)


def money_str(value) -> str | None:
    if value is None:
        return None
    return str(quantize_money(value))


def quantity_str(value) -> str | None:
    if value is None:
        return None
    return str(quantize_quantity(value))
