"""
ERP Invoicing Engine — Policies
===============================
"""

from __future__ import annotations

from typing import Optional

from core.errors import ReasonCode, RejectionReason
from engines.invoicing.models import InvoiceStatus
from engines.orders.models import OrderStatus


def invoice_generation_policy(
    *,
    order_status: str,
    order_number: str,
    has_invoice: bool,
) -> Optional[RejectionReason]:
    """One invoice per order, and only for approved orders."""
    if has_invoice:
        return RejectionReason(
            code=ReasonCode.INVOICE_ALREADY_EXISTS,
            message=f"Invoice already exists for order {order_number}.",
            policy_name="invoice_generation_policy",
        )

    if order_status != OrderStatus.APPROVED:
        return RejectionReason(
            code=ReasonCode.ORDER_NOT_APPROVED,
            message=(
                f"Order {order_number} is {order_status}. "
                f"Only approved orders can be invoiced."
            ),
            policy_name="invoice_generation_policy",
        )

    return None


def invoice_approval_policy(*, status: str, invoice_number: str) -> Optional[RejectionReason]:
    if status != InvoiceStatus.DRAFT:
        return RejectionReason(
            code=ReasonCode.INVALID_TRANSITION,
            message=f"Invoice {invoice_number} is {status}. Only draft invoices can be approved.",
            policy_name="invoice_approval_policy",
        )
    return None


def invoice_delete_policy(*, payment_count: int, invoice_number: str) -> Optional[RejectionReason]:
    if payment_count > 0:
        return RejectionReason(
            code=ReasonCode.INVOICE_HAS_PAYMENTS,
            message=(
                f"Invoice {invoice_number} has {payment_count} payment(s). "
                f"Delete the payments before deleting the invoice."
            ),
            policy_name="invoice_delete_policy",
        )
    return None
