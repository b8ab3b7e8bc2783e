"""
ERP Admin - Master Reset
========================
Clears all transactional data in one transaction. Master data (users,
areas, stores, products, vendors, raw materials) stays; raw-material
stock returns to zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from core.admin.commands import MasterResetRequest
from core.context.actor_context import ActorContext
from core.permissions import PERMISSION_SYSTEM_RESET, require_permission
from core.primitives import quantize_quantity
from engines.inventory.models import InventoryMovement, RawMaterial
from engines.invoicing.models import Invoice, InvoiceItem
from engines.orders.models import Order, OrderItem
from engines.payments.models import Payment
from engines.procurement.models import PurchaseOrder, PurchaseOrderItem, VendorBill

logger = logging.getLogger("erp.admin")


@dataclass(frozen=True)
class MasterResetResult:
    deleted: dict[str, int]
    raw_materials_reset: int


@transaction.atomic
def master_reset(request: MasterResetRequest, *, actor: ActorContext) -> MasterResetResult:
    require_permission(actor, PERMISSION_SYSTEM_RESET, policy_name="master_reset")

    # Children before parents; PROTECT foreign keys would refuse otherwise.
    deleted: dict[str, int] = {}
    for label, model in (
        ("payments", Payment),
        ("invoice_items", InvoiceItem),
        ("invoices", Invoice),
        ("order_items", OrderItem),
        ("orders", Order),
        ("inventory_movements", InventoryMovement),
        ("purchase_order_items", PurchaseOrderItem),
        ("vendor_bills", VendorBill),
        ("purchase_orders", PurchaseOrder),
    ):
        deleted[label], _ = model.objects.all().delete()

    reset = RawMaterial.objects.update(current_stock=quantize_quantity(0))

    logger.warning(f"Master reset by {actor.user_id}: deleted {deleted}, {reset} stock row(s) zeroed.")
    return MasterResetResult(deleted=deleted, raw_materials_reset=reset)
