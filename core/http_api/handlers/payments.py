"""
ERP HTTP API - Payment Handlers
===============================
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import authenticated, list_payload
from engines.invoicing.services import serialize_invoice
from engines.payments.commands import PaymentRecordRequest
from engines.payments.models import PaymentMode
from engines.payments.services import (
    delete_payment,
    list_payments,
    record_payment,
    serialize_payment,
)


def get_payments(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        payments = list_payments(
            actor=actor,
            invoice_id=params.get("invoice_id") or None,
        )
        return list_payload(serialize_payment(payment) for payment in payments)

    return authenticated(dependencies, headers, operation="payments.list", call=_call)


def post_payment_record(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = PaymentRecordRequest(
            invoice_id=params.get("invoice_id"),
            amount=params.get("amount"),
            payment_mode=params.get("payment_mode") or PaymentMode.CASH,
            reference=params.get("reference", ""),
            notes=params.get("notes", ""),
        )
        payment = record_payment(
            request,
            actor=actor,
            numbering=dependencies.numbering,
            now=dependencies.clock.now_utc(),
        )
        return {
            "payment": serialize_payment(payment),
            "invoice": serialize_invoice(payment.invoice),
        }

    return authenticated(dependencies, headers, operation="payments.record", call=_call)


def post_payment_delete(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        invoice = delete_payment(params.get("payment_id"), actor=actor)
        return {
            "deleted": True,
            "id": str(params.get("payment_id")),
            "invoice": serialize_invoice(invoice),
        }

    return authenticated(dependencies, headers, operation="payments.delete", call=_call)
