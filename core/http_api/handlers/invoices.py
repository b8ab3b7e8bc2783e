"""
ERP HTTP API - Invoice Handlers
===============================
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import (
    authenticated,
    list_payload,
    optional_bool,
    optional_text,
)
from engines.invoicing.commands import InvoiceGenerateRequest
from engines.invoicing.services import (
    approve_invoice,
    delete_invoice,
    generate_invoice,
    get_invoice,
    list_invoices,
    serialize_invoice,
)


def get_invoices(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        invoices = list_invoices(
            status=optional_text(params, "status"),
            store_id=params.get("store_id") or None,
        )
        return list_payload(serialize_invoice(invoice) for invoice in invoices)

    return authenticated(dependencies, headers, operation="invoices.list", call=_call)


def get_invoice_detail(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="invoices.get",
        call=lambda actor: serialize_invoice(
            get_invoice(params.get("invoice_id")),
            include_details=True,
        ),
    )


def post_invoice_generate(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = InvoiceGenerateRequest(
            order_id=params.get("order_id"),
            discount_percent=params.get("discount_percent"),
            product_discounts=params.get("product_discounts") or {},
            update_store_margin=bool(optional_bool(params, "update_store_margin")),
            due_date=params.get("due_date"),
            notes=params.get("notes", ""),
        )
        invoice = generate_invoice(
            request,
            actor=actor,
            numbering=dependencies.numbering,
            now=dependencies.clock.now_utc(),
        )
        return serialize_invoice(invoice, include_details=True)

    return authenticated(dependencies, headers, operation="invoices.generate", call=_call)


def post_invoice_approve(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        invoice = approve_invoice(
            params.get("invoice_id"),
            actor=actor,
            now=dependencies.clock.now_utc(),
        )
        return serialize_invoice(invoice)

    return authenticated(dependencies, headers, operation="invoices.approve", call=_call)


def post_invoice_delete(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        delete_invoice(params.get("invoice_id"), actor=actor)
        return {"deleted": True, "id": str(params.get("invoice_id"))}

    return authenticated(dependencies, headers, operation="invoices.delete", call=_call)
