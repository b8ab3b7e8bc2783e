"""
ERP Invoicing Engine — Service
==============================
generate: approved order → draft invoice, order → invoiced (one transaction)
approve:  draft → unpaid
delete:   invoice removed, order back to approved (one transaction)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from django.db import transaction

from core.context.actor_context import ActorContext
from core.documents.numbering import (
    DOC_INVOICE,
    NumberingProvider,
    issue_document_number,
)
from core.errors import NotFound, ValidationError, raise_for_rejection
from core.permissions import PERMISSION_INVOICES_MANAGE, require_permission
from core.primitives import ZERO, canonical_uuid, money_str
from engines.invoicing.calculator import (
    InvoiceLineInput,
    compute_invoice,
    hsn_summary,
    split_gst,
)
from engines.invoicing.commands import InvoiceGenerateRequest
from engines.invoicing.models import Invoice, InvoiceItem, InvoiceStatus
from engines.invoicing.policies import (
    invoice_approval_policy,
    invoice_delete_policy,
    invoice_generation_policy,
)
from engines.orders.models import Order, OrderStatus
from engines.orders.services import transition_order

logger = logging.getLogger("erp.invoicing")


# ══════════════════════════════════════════════════════════════
# SERIALIZATION
# ══════════════════════════════════════════════════════════════

def serialize_invoice_item(item: InvoiceItem) -> dict[str, Any]:
    return {
        "id": str(item.id),
        "product_id": str(item.product_id),
        "product_name": item.product.name,
        "hsn_code": item.product.hsn_code,
        "quantity": item.quantity,
        "list_price": money_str(item.list_price),
        "price": money_str(item.price),
        "discount_percent": money_str(item.discount_percent),
        "discount_amount": money_str(item.discount_amount),
        "gst_percent": money_str(item.gst_percent),
        "gst_amount": money_str(item.gst_amount),
        "total": money_str(item.total),
    }


def _serialize_invoice_payment(payment) -> dict[str, Any]:
    return {
        "id": str(payment.id),
        "payment_number": payment.payment_number,
        "amount": money_str(payment.amount),
        "payment_mode": payment.payment_mode,
        "collected_by_id": str(payment.collected_by_id),
        "created_at": payment.created_at.isoformat(),
    }


def _serialize_tax_summary(invoice: Invoice, items: list[InvoiceItem]) -> dict[str, Any]:
    cgst, sgst = split_gst(invoice.gst_amount)
    rows = hsn_summary(
        (
            item.product.hsn_code,
            item.gst_percent,
            item.total - item.gst_amount,
            item.gst_amount,
        )
        for item in items
    )
    return {
        "cgst_amount": money_str(cgst),
        "sgst_amount": money_str(sgst),
        "hsn": [
            {
                "hsn_code": row["hsn_code"],
                "gst_percent": money_str(row["gst_percent"]),
                "taxable_amount": money_str(row["taxable_amount"]),
                "cgst_amount": money_str(row["cgst_amount"]),
                "sgst_amount": money_str(row["sgst_amount"]),
                "gst_amount": money_str(row["gst_amount"]),
            }
            for row in rows
        ],
    }


def serialize_invoice(
    invoice: Invoice,
    *,
    include_details: bool = False,
) -> dict[str, Any]:
    data = {
        "id": str(invoice.id),
        "invoice_number": invoice.invoice_number,
        "order_id": str(invoice.order_id),
        "order_number": invoice.order.order_number,
        "store_id": str(invoice.store_id),
        "store_name": invoice.store.name,
        "created_by_id": str(invoice.created_by_id),
        "subtotal": money_str(invoice.subtotal),
        "discount_percent": money_str(invoice.discount_percent),
        "discount_amount": money_str(invoice.discount_amount),
        "gst_amount": money_str(invoice.gst_amount),
        "total_amount": money_str(invoice.total_amount),
        "paid_amount": money_str(invoice.paid_amount),
        "balance_amount": money_str(invoice.balance_amount),
        "status": invoice.status,
        "due_date": None if invoice.due_date is None else invoice.due_date.isoformat(),
        "notes": invoice.notes,
        "issued_at": invoice.issued_at.isoformat(),
        "approved_at": (
            None if invoice.approved_at is None else invoice.approved_at.isoformat()
        ),
    }
    if include_details:
        items = list(invoice.items.select_related("product").order_by("id"))
        data["items"] = [serialize_invoice_item(item) for item in items]
        data["payments"] = [
            _serialize_invoice_payment(payment)
            for payment in invoice.payments.order_by("created_at", "id")
        ]
        data["tax_summary"] = _serialize_tax_summary(invoice, items)
    return data


# ══════════════════════════════════════════════════════════════
# QUERIES
# ══════════════════════════════════════════════════════════════

def _load_invoice(invoice_id: Any, *, for_update: bool = False) -> Invoice:
    rows = Invoice.objects.select_related("store", "order")
    if for_update:
        rows = rows.select_for_update()
    invoice = rows.filter(
        id=canonical_uuid(invoice_id, field_name="invoice_id")
    ).first()
    if invoice is None:
        raise NotFound(f"Invoice '{invoice_id}' not found.")
    return invoice


def get_invoice(invoice_id: Any) -> Invoice:
    return _load_invoice(invoice_id)


def list_invoices(
    *,
    status: Optional[str] = None,
    store_id: Any = None,
) -> tuple[Invoice, ...]:
    rows = Invoice.objects.select_related("store", "order")
    if status is not None:
        if status not in InvoiceStatus.values:
            raise ValidationError(f"Unknown invoice status '{status}'.")
        rows = rows.filter(status=status)
    if store_id is not None:
        rows = rows.filter(store_id=canonical_uuid(store_id, field_name="store_id"))
    return tuple(rows.order_by("-issued_at", "id"))


# ══════════════════════════════════════════════════════════════
# COMMANDS
# ══════════════════════════════════════════════════════════════

@transaction.atomic
def generate_invoice(
    request: InvoiceGenerateRequest,
    *,
    actor: ActorContext,
    numbering: NumberingProvider,
    now: datetime,
) -> Invoice:
    require_permission(actor, PERMISSION_INVOICES_MANAGE, policy_name="generate_invoice")

    order = Order.objects.select_for_update().filter(id=request.order_id).first()
    if order is None:
        raise NotFound(f"Order '{request.order_id}' not found.")

    raise_for_rejection(
        invoice_generation_policy(
            order_status=order.status,
            order_number=order.order_number,
            has_invoice=Invoice.objects.filter(order_id=order.id).exists(),
        )
    )

    store = order.store
    if request.discount_percent is not None:
        default_percent = request.discount_percent
    else:
        default_percent = store.margin_discount_percent or ZERO

    order_items = list(order.items.select_related("product").order_by("id"))
    totals = compute_invoice(
        InvoiceLineInput(
            product_id=str(item.product_id),
            quantity=item.quantity,
            price=item.price,
            discount_percent=request.product_discounts.get(
                item.product_id, default_percent
            ),
            gst_percent=item.product.gst_percent,
        )
        for item in order_items
    )
    if totals.total_amount <= ZERO:
        raise ValidationError(
            f"Order {order.order_number} has nothing to bill: the invoice total is zero."
        )

    invoice = Invoice.objects.create(
        invoice_number=issue_document_number(numbering, DOC_INVOICE, now),
        order=order,
        store=store,
        created_by_id=actor.user_id,
        subtotal=totals.subtotal,
        discount_percent=default_percent,
        discount_amount=totals.discount_amount,
        gst_amount=totals.gst_amount,
        total_amount=totals.total_amount,
        paid_amount=ZERO,
        balance_amount=totals.total_amount,
        status=InvoiceStatus.DRAFT,
        due_date=request.due_date,
        notes=request.notes,
        issued_at=now,
    )
    InvoiceItem.objects.bulk_create(
        [
            InvoiceItem(
                invoice=invoice,
                product_id=order_item.product_id,
                quantity=line.quantity,
                list_price=line.list_price,
                price=line.unit_price,
                discount_percent=line.discount_percent,
                discount_amount=line.discount_amount,
                gst_percent=line.gst_percent,
                gst_amount=line.gst_amount,
                total=line.total,
            )
            for order_item, line in zip(order_items, totals.lines)
        ]
    )

    transition_order(order, OrderStatus.INVOICED, actor=actor)

    if request.update_store_margin:
        store.margin_discount_percent = default_percent
        store.save(update_fields=["margin_discount_percent", "updated_at"])
        logger.info(f"Store {store.id} margin discount set to {default_percent}%.")

    logger.info(
        f"Invoice {invoice.invoice_number} generated for order {order.order_number}: "
        f"subtotal {invoice.subtotal}, discount {invoice.discount_amount}, "
        f"gst {invoice.gst_amount}, total {invoice.total_amount}."
    )
    return invoice


@transaction.atomic
def approve_invoice(invoice_id: Any, *, actor: ActorContext, now: datetime) -> Invoice:
    require_permission(actor, PERMISSION_INVOICES_MANAGE, policy_name="approve_invoice")
    invoice = _load_invoice(invoice_id, for_update=True)
    raise_for_rejection(
        invoice_approval_policy(
            status=invoice.status,
            invoice_number=invoice.invoice_number,
        )
    )
    invoice.status = InvoiceStatus.UNPAID
    invoice.approved_at = now
    invoice.save(update_fields=["status", "approved_at", "updated_at"])
    logger.info(f"Invoice {invoice.invoice_number} approved by {actor.user_id}.")
    return invoice


@transaction.atomic
def delete_invoice(invoice_id: Any, *, actor: ActorContext) -> None:
    require_permission(actor, PERMISSION_INVOICES_MANAGE, policy_name="delete_invoice")
    invoice = _load_invoice(invoice_id, for_update=True)
    raise_for_rejection(
        invoice_delete_policy(
            payment_count=invoice.payments.count(),
            invoice_number=invoice.invoice_number,
        )
    )

    order = Order.objects.select_for_update().get(id=invoice.order_id)
    invoice_number = invoice.invoice_number
    invoice.delete()

    # Compensating step outside the forward state machine.
    order.status = OrderStatus.APPROVED
    order.save(update_fields=["status", "updated_at"])
    logger.info(
        f"Invoice {invoice_number} deleted by {actor.user_id}; "
        f"order {order.order_number} reverted to approved."
    )
