"""
ERP Payments Engine — Service
=============================
record: payment row + invoice paid/balance/status, one transaction
delete: exact inverse, one transaction

Both lock the invoice row so concurrent collections serialize on the
balance.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from django.db import transaction

from core.context.actor_context import ActorContext
from core.documents.numbering import (
    DOC_PAYMENT,
    NumberingProvider,
    issue_document_number,
)
from core.errors import NotFound, raise_for_rejection
from core.permissions import (
    PERMISSION_PAYMENTS_DELETE,
    PERMISSION_PAYMENTS_RECORD,
    PERMISSION_PAYMENTS_VIEW_ALL,
    has_permission,
    require_permission,
)
from core.primitives import canonical_uuid, money_str, quantize_money
from engines.invoicing.models import Invoice
from engines.payments.commands import PaymentRecordRequest
from engines.payments.models import Payment
from engines.payments.policies import payment_amount_policy
from engines.payments.reconciliation import (
    InvoiceBalance,
    balance_after_payment,
    balance_after_removal,
)

logger = logging.getLogger("erp.payments")


def serialize_payment(payment: Payment) -> dict[str, Any]:
    return {
        "id": str(payment.id),
        "payment_number": payment.payment_number,
        "invoice_id": str(payment.invoice_id),
        "invoice_number": payment.invoice.invoice_number,
        "store_id": str(payment.store_id),
        "store_name": payment.store.name,
        "collected_by_id": str(payment.collected_by_id),
        "collected_by_name": payment.collected_by.name,
        "amount": money_str(payment.amount),
        "payment_mode": payment.payment_mode,
        "reference": payment.reference,
        "notes": payment.notes,
        "paid_at": payment.paid_at.isoformat(),
    }


def list_payments(
    *,
    actor: ActorContext,
    invoice_id: Any = None,
) -> tuple[Payment, ...]:
    rows = Payment.objects.select_related("invoice", "store", "collected_by")
    if invoice_id is not None:
        rows = rows.filter(invoice_id=canonical_uuid(invoice_id, field_name="invoice_id"))
    if not has_permission(actor, PERMISSION_PAYMENTS_VIEW_ALL):
        rows = rows.filter(collected_by_id=actor.user_id)
    return tuple(rows.order_by("-paid_at", "id"))


def _lock_invoice(invoice_id) -> Invoice:
    invoice = Invoice.objects.select_for_update().filter(id=invoice_id).first()
    if invoice is None:
        raise NotFound(f"Invoice '{invoice_id}' not found.")
    return invoice


def _apply_balance(invoice: Invoice, balance: InvoiceBalance) -> None:
    invoice.paid_amount = balance.paid_amount
    invoice.balance_amount = balance.balance_amount
    invoice.status = balance.status
    invoice.save(update_fields=["paid_amount", "balance_amount", "status", "updated_at"])


@transaction.atomic
def record_payment(
    request: PaymentRecordRequest,
    *,
    actor: ActorContext,
    numbering: NumberingProvider,
    now: datetime,
) -> Payment:
    require_permission(actor, PERMISSION_PAYMENTS_RECORD, policy_name="record_payment")

    invoice = _lock_invoice(request.invoice_id)
    amount = quantize_money(request.amount)
    raise_for_rejection(
        payment_amount_policy(amount=amount, balance_amount=invoice.balance_amount)
    )

    payment = Payment.objects.create(
        payment_number=issue_document_number(numbering, DOC_PAYMENT, now),
        invoice=invoice,
        store_id=invoice.store_id,
        collected_by_id=actor.user_id,
        amount=amount,
        payment_mode=request.payment_mode,
        reference=request.reference,
        notes=request.notes,
        paid_at=now,
    )
    _apply_balance(
        invoice,
        balance_after_payment(
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            amount=amount,
        ),
    )
    logger.info(
        f"Payment {payment.payment_number} of {amount} recorded on invoice "
        f"{invoice.invoice_number} by {actor.user_id}: balance {invoice.balance_amount}, "
        f"status {invoice.status}."
    )
    return payment


@transaction.atomic
def delete_payment(payment_id: Any, *, actor: ActorContext) -> Invoice:
    require_permission(actor, PERMISSION_PAYMENTS_DELETE, policy_name="delete_payment")

    payment = Payment.objects.filter(
        id=canonical_uuid(payment_id, field_name="payment_id")
    ).first()
    if payment is None:
        raise NotFound(f"Payment '{payment_id}' not found.")

    invoice = _lock_invoice(payment.invoice_id)
    # Re-read under the invoice lock: a concurrent delete may have won.
    payment = Payment.objects.select_for_update().filter(id=payment.id).first()
    if payment is None:
        raise NotFound(f"Payment '{payment_id}' not found.")
    payment_number = payment.payment_number
    amount = payment.amount
    payment.delete()
    _apply_balance(
        invoice,
        balance_after_removal(
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            amount=amount,
        ),
    )
    logger.info(
        f"Payment {payment_number} of {amount} deleted by {actor.user_id}; invoice "
        f"{invoice.invoice_number} balance {invoice.balance_amount}, status {invoice.status}."
    )
    return invoice
