"""
ERP Payments Engine — Reconciliation
====================================
Pure balance arithmetic shared by record and delete.

    balance_amount = total_amount - paid_amount
    paid     ⇔ balance_amount <= 0
    unpaid   ⇔ paid_amount <= 0 (after a deletion)
    partial  otherwise
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from core.primitives import ZERO, quantize_money
from engines.invoicing.models import InvoiceStatus


@dataclass(frozen=True)
class InvoiceBalance:
    paid_amount: Decimal
    balance_amount: Decimal
    status: str


def balance_after_payment(
    *,
    total_amount: Decimal,
    paid_amount: Decimal,
    amount: Decimal,
) -> InvoiceBalance:
    paid = quantize_money(paid_amount + amount)
    balance = quantize_money(total_amount - paid)
    status = InvoiceStatus.PAID if balance <= ZERO else InvoiceStatus.PARTIAL
    return InvoiceBalance(paid_amount=paid, balance_amount=balance, status=status)


def balance_after_removal(
    *,
    total_amount: Decimal,
    paid_amount: Decimal,
    amount: Decimal,
) -> InvoiceBalance:
    paid = max(ZERO, quantize_money(paid_amount - amount))
    balance = quantize_money(total_amount - paid)
    if balance <= ZERO:
        status = InvoiceStatus.PAID
    elif paid <= ZERO:
        status = InvoiceStatus.UNPAID
    else:
        status = InvoiceStatus.PARTIAL
    return InvoiceBalance(paid_amount=paid, balance_amount=balance, status=status)
