"""
ERP Invoicing Engine — Calculator
=================================
Pure invoice arithmetic. No Django, no database.

Per line:
    line_subtotal   = quantity × price
    discount_amount = line_subtotal × discount% / 100
    taxable_amount  = line_subtotal − discount_amount
    gst_amount      = taxable_amount × gst% / 100
    total           = taxable_amount + gst_amount

Amounts are rounded per line (ROUND_HALF_UP, 2 places) and the invoice
totals are exact sums of the rounded line values, so

    total_amount == subtotal − discount_amount + gst_amount

holds to the paisa.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from core.primitives import HUNDRED, ZERO, percent_of, quantize_money


def _require_decimal(value, *, field_name: str) -> Decimal:
    if not isinstance(value, Decimal):
        raise ValueError(f"{field_name} must be Decimal.")
    return value


def _require_percent(value, *, field_name: str) -> Decimal:
    value = _require_decimal(value, field_name=field_name)
    if value < 0 or value > HUNDRED:
        raise ValueError(f"{field_name} must be between 0 and 100.")
    return value


@dataclass(frozen=True)
class InvoiceLineInput:
    product_id: str
    quantity: int
    price: Decimal
    discount_percent: Decimal
    gst_percent: Decimal

    def __post_init__(self):
        if not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValueError("quantity must be a positive integer.")
        if _require_decimal(self.price, field_name="price") < 0:
            raise ValueError("price must be >= 0.")
        _require_percent(self.discount_percent, field_name="discount_percent")
        _require_percent(self.gst_percent, field_name="gst_percent")


@dataclass(frozen=True)
class InvoiceLineAmounts:
    product_id: str
    quantity: int
    list_price: Decimal
    unit_price: Decimal
    discount_percent: Decimal
    line_subtotal: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    gst_percent: Decimal
    gst_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    lines: tuple[InvoiceLineAmounts, ...]
    subtotal: Decimal
    discount_amount: Decimal
    gst_amount: Decimal
    total_amount: Decimal


def compute_line(line: InvoiceLineInput) -> InvoiceLineAmounts:
    line_subtotal = quantize_money(Decimal(line.quantity) * line.price)
    discount_amount = percent_of(line_subtotal, line.discount_percent)
    taxable_amount = line_subtotal - discount_amount
    gst_amount = percent_of(taxable_amount, line.gst_percent)
    unit_price = quantize_money(
        line.price * (HUNDRED - line.discount_percent) / HUNDRED
    )
    return InvoiceLineAmounts(
        product_id=line.product_id,
        quantity=line.quantity,
        list_price=quantize_money(line.price),
        unit_price=unit_price,
        discount_percent=line.discount_percent,
        line_subtotal=line_subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        gst_percent=line.gst_percent,
        gst_amount=gst_amount,
        total=taxable_amount + gst_amount,
    )


def compute_invoice(lines: Iterable[InvoiceLineInput]) -> InvoiceTotals:
    computed = tuple(compute_line(line) for line in lines)
    if not computed:
        raise ValueError("An invoice needs at least one line.")
    subtotal = sum((line.line_subtotal for line in computed), ZERO)
    discount_amount = sum((line.discount_amount for line in computed), ZERO)
    gst_amount = sum((line.gst_amount for line in computed), ZERO)
    return InvoiceTotals(
        lines=computed,
        subtotal=subtotal,
        discount_amount=discount_amount,
        gst_amount=gst_amount,
        total_amount=subtotal - discount_amount + gst_amount,
    )


def split_gst(gst_amount: Decimal) -> tuple[Decimal, Decimal]:
    """Intra-state split into (CGST, SGST); SGST absorbs the odd paisa."""
    cgst = quantize_money(gst_amount / 2)
    return cgst, gst_amount - cgst


def hsn_summary(
    rows: Iterable[tuple[str, Decimal, Decimal, Decimal]],
) -> list[dict]:
    """
    Group (hsn_code, gst_percent, taxable_amount, gst_amount) rows into
    the per-HSN tax table printed on GST invoices.
    """
    grouped: dict[tuple[str, Decimal], dict] = {}
    for hsn_code, gst_percent, taxable_amount, gst_amount in rows:
        key = (hsn_code or "", gst_percent)
        bucket = grouped.setdefault(
            key,
            {"taxable_amount": ZERO, "gst_amount": ZERO},
        )
        bucket["taxable_amount"] += taxable_amount
        bucket["gst_amount"] += gst_amount

    summary = []
    for (hsn_code, gst_percent), bucket in sorted(grouped.items()):
        cgst, sgst = split_gst(bucket["gst_amount"])
        summary.append(
            {
                "hsn_code": hsn_code,
                "gst_percent": gst_percent,
                "taxable_amount": bucket["taxable_amount"],
                "cgst_amount": cgst,
                "sgst_amount": sgst,
                "gst_amount": bucket["gst_amount"],
            }
        )
    return summary
