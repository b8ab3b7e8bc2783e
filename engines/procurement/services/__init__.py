"""
ERP Procurement Engine — Service
================================
create PO → receive (stock in + vendor bill) → bill sent → bill paid

Receiving runs in one transaction: the PO status flip, one inventory
movement per line and the vendor bill commit together or not at all.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from django.db import transaction

from core.context.actor_context import ActorContext
from core.documents.numbering import (
    DOC_PURCHASE_ORDER,
    NumberingProvider,
    issue_document_number,
)
from core.errors import NotFound, ValidationError, raise_for_rejection
from core.permissions import PERMISSION_PROCUREMENT_MANAGE, require_permission
from core.primitives import ZERO, canonical_uuid, money_str, quantity_str, quantize_money
from engines.inventory.models import MovementType, RawMaterial
from engines.inventory.services import apply_movement
from engines.procurement.commands import (
    PurchaseOrderCreateRequest,
    VendorBillUpdateRequest,
    VendorCreateRequest,
    VendorUpdateRequest,
)
from engines.procurement.models import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    Vendor,
    VendorBill,
    VendorBillStatus,
)
from engines.procurement.policies import receive_policy, vendor_bill_transition_policy

logger = logging.getLogger("erp.procurement")


# ══════════════════════════════════════════════════════════════
# SERIALIZATION
# ══════════════════════════════════════════════════════════════

def serialize_vendor(vendor: Vendor) -> dict[str, Any]:
    return {
        "id": str(vendor.id),
        "name": vendor.name,
        "phone": vendor.phone,
        "gst_number": vendor.gst_number,
        "address": vendor.address,
        "email": vendor.email,
        "billing_cycle_days": vendor.billing_cycle_days,
        "is_active": vendor.is_active,
    }


def serialize_purchase_order(
    purchase: PurchaseOrder,
    *,
    include_items: bool = False,
) -> dict[str, Any]:
    data = {
        "id": str(purchase.id),
        "order_number": purchase.order_number,
        "vendor_id": str(purchase.vendor_id),
        "vendor_name": purchase.vendor.name,
        "status": purchase.status,
        "total_amount": money_str(purchase.total_amount),
        "notes": purchase.notes,
        "reached_office_at": (
            None
            if purchase.reached_office_at is None
            else purchase.reached_office_at.isoformat()
        ),
        "created_at": purchase.created_at.isoformat(),
    }
    if include_items:
        data["items"] = [
            {
                "id": str(item.id),
                "raw_material_id": str(item.raw_material_id),
                "raw_material_name": item.raw_material.name,
                "quantity": quantity_str(item.quantity),
                "price": money_str(item.price),
                "total": money_str(item.total),
            }
            for item in purchase.items.select_related("raw_material").order_by("id")
        ]
    return data


def serialize_vendor_bill(bill: VendorBill) -> dict[str, Any]:
    return {
        "id": str(bill.id),
        "vendor_id": str(bill.vendor_id),
        "vendor_name": bill.vendor.name,
        "purchase_order_id": str(bill.purchase_order_id),
        "purchase_order_number": bill.purchase_order.order_number,
        "amount": money_str(bill.amount),
        "status": bill.status,
        "bill_number": bill.bill_number,
        "bill_date": None if bill.bill_date is None else bill.bill_date.isoformat(),
    }


# ══════════════════════════════════════════════════════════════
# VENDORS
# ══════════════════════════════════════════════════════════════

def list_vendors(*, actor: ActorContext) -> tuple[Vendor, ...]:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="list_vendors")
    return tuple(Vendor.objects.filter(is_active=True).order_by("name"))


def _load_vendor(vendor_id: Any) -> Vendor:
    vendor = Vendor.objects.filter(
        id=canonical_uuid(vendor_id, field_name="vendor_id")
    ).first()
    if vendor is None:
        raise NotFound(f"Vendor '{vendor_id}' not found.")
    return vendor


def get_vendor(vendor_id: Any, *, actor: ActorContext) -> Vendor:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="get_vendor")
    return _load_vendor(vendor_id)


def create_vendor(request: VendorCreateRequest, *, actor: ActorContext) -> Vendor:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="create_vendor")
    vendor = Vendor.objects.create(
        name=request.name,
        phone=request.phone,
        gst_number=request.gst_number,
        address=request.address,
        email=request.email,
        billing_cycle_days=request.billing_cycle_days,
    )
    logger.info(f"Vendor {vendor.name} ({vendor.id}) created by {actor.user_id}.")
    return vendor


def update_vendor(request: VendorUpdateRequest, *, actor: ActorContext) -> Vendor:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="update_vendor")
    vendor = _load_vendor(request.vendor_id)
    if not request.changes:
        return vendor
    for key, value in request.changes.items():
        setattr(vendor, key, value)
    vendor.save(update_fields=[*request.changes, "updated_at"])
    logger.info(f"Vendor {vendor.id} updated by {actor.user_id}: {sorted(request.changes)}.")
    return vendor


def deactivate_vendor(vendor_id: Any, *, actor: ActorContext) -> Vendor:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="deactivate_vendor")
    vendor = _load_vendor(vendor_id)
    vendor.is_active = False
    vendor.save(update_fields=["is_active", "updated_at"])
    logger.info(f"Vendor {vendor.id} deactivated by {actor.user_id}.")
    return vendor


# ══════════════════════════════════════════════════════════════
# PURCHASE ORDERS
# ══════════════════════════════════════════════════════════════

def list_purchase_orders(
    *,
    actor: ActorContext,
    status: Optional[str] = None,
) -> tuple[PurchaseOrder, ...]:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="list_purchase_orders")
    rows = PurchaseOrder.objects.select_related("vendor")
    if status is not None:
        if status not in PurchaseOrderStatus.values:
            raise ValidationError(f"Unknown purchase order status '{status}'.")
        rows = rows.filter(status=status)
    return tuple(rows.order_by("-created_at", "id"))


def _load_purchase_order(purchase_id: Any, *, for_update: bool = False) -> PurchaseOrder:
    rows = PurchaseOrder.objects.select_related("vendor")
    if for_update:
        rows = rows.select_for_update()
    purchase = rows.filter(
        id=canonical_uuid(purchase_id, field_name="purchase_order_id")
    ).first()
    if purchase is None:
        raise NotFound(f"Purchase order '{purchase_id}' not found.")
    return purchase


def get_purchase_order(purchase_id: Any, *, actor: ActorContext) -> PurchaseOrder:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="get_purchase_order")
    return _load_purchase_order(purchase_id)


@transaction.atomic
def create_purchase_order(
    request: PurchaseOrderCreateRequest,
    *,
    actor: ActorContext,
    numbering: NumberingProvider,
    now: datetime,
) -> PurchaseOrder:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="create_purchase_order")

    vendor = _load_vendor(request.vendor_id)
    if not vendor.is_active:
        raise ValidationError(f"Vendor '{vendor.name}' is inactive.")

    material_ids = {line.raw_material_id for line in request.items}
    found = set(
        RawMaterial.objects.filter(id__in=material_ids).values_list("id", flat=True)
    )
    missing = sorted(str(mid) for mid in material_ids - found)
    if missing:
        raise NotFound(f"Raw materials not found: {', '.join(missing)}.")

    purchase = PurchaseOrder.objects.create(
        order_number=issue_document_number(numbering, DOC_PURCHASE_ORDER, now),
        vendor=vendor,
        status=PurchaseOrderStatus.PENDING,
        total_amount=ZERO,
        notes=request.notes,
        created_by_id=actor.user_id,
    )

    total_amount = ZERO
    items = []
    for line in request.items:
        line_total = quantize_money(line.quantity * line.price)
        total_amount += line_total
        items.append(
            PurchaseOrderItem(
                purchase_order=purchase,
                raw_material_id=line.raw_material_id,
                quantity=line.quantity,
                price=line.price,
                total=line_total,
            )
        )
    PurchaseOrderItem.objects.bulk_create(items)

    purchase.total_amount = quantize_money(total_amount)
    purchase.save(update_fields=["total_amount", "updated_at"])

    logger.info(
        f"Purchase order {purchase.order_number} created for vendor {vendor.id}: "
        f"{len(items)} line(s), total {purchase.total_amount}."
    )
    return purchase


@transaction.atomic
def receive_purchase_order(
    purchase_id: Any,
    *,
    actor: ActorContext,
    now: datetime,
) -> PurchaseOrder:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="receive_purchase_order")

    purchase = _load_purchase_order(purchase_id, for_update=True)
    raise_for_rejection(receive_policy(status=purchase.status))

    purchase.status = PurchaseOrderStatus.REACHED_OFFICE
    purchase.reached_office_at = now
    purchase.save(update_fields=["status", "reached_office_at", "updated_at"])

    received: Decimal = Decimal("0")
    for item in purchase.items.order_by("id"):
        apply_movement(
            item.raw_material_id,
            movement_type=MovementType.IN,
            quantity=item.quantity,
            notes=f"Received from PO {purchase.order_number}",
            created_by_id=actor.user_id,
            now=now,
        )
        received += item.quantity

    VendorBill.objects.create(
        vendor_id=purchase.vendor_id,
        purchase_order=purchase,
        amount=purchase.total_amount,
        status=VendorBillStatus.PENDING_DISPATCH,
    )

    logger.info(
        f"Purchase order {purchase.order_number} received by {actor.user_id}: "
        f"{received} units into stock, vendor bill {purchase.total_amount} raised."
    )
    return purchase


# ══════════════════════════════════════════════════════════════
# VENDOR BILLS
# ══════════════════════════════════════════════════════════════

def list_vendor_bills(
    *,
    actor: ActorContext,
    status: Optional[str] = None,
) -> tuple[VendorBill, ...]:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="list_vendor_bills")
    rows = VendorBill.objects.select_related("vendor", "purchase_order")
    if status is not None:
        if status not in VendorBillStatus.values:
            raise ValidationError(f"Unknown vendor bill status '{status}'.")
        rows = rows.filter(status=status)
    return tuple(rows.order_by("-created_at", "id"))


@transaction.atomic
def update_vendor_bill(
    request: VendorBillUpdateRequest,
    *,
    actor: ActorContext,
) -> VendorBill:
    require_permission(actor, PERMISSION_PROCUREMENT_MANAGE, policy_name="update_vendor_bill")

    bill = (
        VendorBill.objects.select_for_update()
        .select_related("vendor", "purchase_order")
        .filter(id=request.bill_id)
        .first()
    )
    if bill is None:
        raise NotFound(f"Vendor bill '{request.bill_id}' not found.")

    fields = []
    if request.status is not None and request.status != bill.status:
        raise_for_rejection(
            vendor_bill_transition_policy(current=bill.status, target=request.status)
        )
        bill.status = request.status
        fields.append("status")
    if request.bill_number is not None:
        bill.bill_number = request.bill_number
        fields.append("bill_number")
    if request.bill_date is not None:
        bill.bill_date = request.bill_date
        fields.append("bill_date")

    if fields:
        bill.save(update_fields=[*fields, "updated_at"])
        logger.info(f"Vendor bill {bill.id} updated by {actor.user_id}: {fields}.")
    return bill
