"""
ERP HTTP API - Procurement Handlers
===================================
Vendors, purchase orders and vendor bills. Admin only; the services
enforce the permission.
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import (
    authenticated,
    changes_from,
    list_payload,
    object_list,
    optional_text,
)
from engines.procurement.commands import (
    PurchaseLineInput,
    PurchaseOrderCreateRequest,
    VendorBillUpdateRequest,
    VendorCreateRequest,
    VendorUpdateRequest,
)
from engines.procurement.services import (
    create_purchase_order,
    create_vendor,
    deactivate_vendor,
    get_purchase_order,
    get_vendor,
    list_purchase_orders,
    list_vendor_bills,
    list_vendors,
    receive_purchase_order,
    serialize_purchase_order,
    serialize_vendor,
    serialize_vendor_bill,
    update_vendor,
    update_vendor_bill,
)


# ══════════════════════════════════════════════════════════════
# VENDORS
# ══════════════════════════════════════════════════════════════

def get_vendors(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="vendors.list",
        call=lambda actor: list_payload(
            serialize_vendor(vendor) for vendor in list_vendors(actor=actor)
        ),
    )


def get_vendor_detail(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="vendors.get",
        call=lambda actor: serialize_vendor(get_vendor(params.get("vendor_id"), actor=actor)),
    )


def post_vendor_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = VendorCreateRequest(
            name=params.get("name"),
            phone=params.get("phone"),
            gst_number=params.get("gst_number", ""),
            address=params.get("address", ""),
            email=params.get("email", ""),
            billing_cycle_days=params.get("billing_cycle_days", 0),
        )
        return serialize_vendor(create_vendor(request, actor=actor))

    return authenticated(dependencies, headers, operation="vendors.create", call=_call)


def post_vendor_update(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = VendorUpdateRequest(
            vendor_id=params.get("vendor_id"),
            changes=changes_from(params, exclude=("vendor_id",)),
        )
        return serialize_vendor(update_vendor(request, actor=actor))

    return authenticated(dependencies, headers, operation="vendors.update", call=_call)


def post_vendor_delete(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="vendors.delete",
        call=lambda actor: serialize_vendor(
            deactivate_vendor(params.get("vendor_id"), actor=actor)
        ),
    )


# ══════════════════════════════════════════════════════════════
# PURCHASE ORDERS
# ══════════════════════════════════════════════════════════════

def get_purchase_orders(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        purchases = list_purchase_orders(actor=actor, status=optional_text(params, "status"))
        return list_payload(
            serialize_purchase_order(purchase, include_items=True) for purchase in purchases
        )

    return authenticated(dependencies, headers, operation="purchases.list", call=_call)


def get_purchase_order_detail(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="purchases.get",
        call=lambda actor: serialize_purchase_order(
            get_purchase_order(params.get("purchase_order_id"), actor=actor),
            include_items=True,
        ),
    )


def post_purchase_order_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = PurchaseOrderCreateRequest(
            vendor_id=params.get("vendor_id"),
            items=tuple(
                PurchaseLineInput(
                    raw_material_id=line.get("raw_material_id"),
                    quantity=line.get("quantity"),
                    price=line.get("price"),
                )
                for line in object_list(params, "items")
            ),
            notes=params.get("notes", ""),
        )
        purchase = create_purchase_order(
            request,
            actor=actor,
            numbering=dependencies.numbering,
            now=dependencies.clock.now_utc(),
        )
        return serialize_purchase_order(purchase, include_items=True)

    return authenticated(dependencies, headers, operation="purchases.create", call=_call)


def post_purchase_order_receive(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        purchase = receive_purchase_order(
            params.get("purchase_order_id"),
            actor=actor,
            now=dependencies.clock.now_utc(),
        )
        return serialize_purchase_order(purchase, include_items=True)

    return authenticated(dependencies, headers, operation="purchases.receive", call=_call)


# ══════════════════════════════════════════════════════════════
# VENDOR BILLS
# ══════════════════════════════════════════════════════════════

def get_vendor_bills(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        bills = list_vendor_bills(actor=actor, status=optional_text(params, "status"))
        return list_payload(serialize_vendor_bill(bill) for bill in bills)

    return authenticated(dependencies, headers, operation="vendor_bills.list", call=_call)


def post_vendor_bill_update(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = VendorBillUpdateRequest(
            bill_id=params.get("bill_id"),
            status=params.get("status"),
            bill_number=params.get("bill_number"),
            bill_date=params.get("bill_date"),
        )
        return serialize_vendor_bill(update_vendor_bill(request, actor=actor))

    return authenticated(dependencies, headers, operation="vendor_bills.update", call=_call)
