from __future__ import annotations

from decimal import Decimal

import pytest

from core.admin import (
    MasterResetRequest,
    build_dashboard_summary,
    master_reset,
    serialize_dashboard_summary,
)
from core.errors import Forbidden
from core.identity.models import User
from engines.catalog.models import Product
from engines.inventory.commands import RawMaterialCreateRequest
from engines.inventory.models import InventoryMovement, RawMaterial
from engines.inventory.services import create_raw_material
from engines.invoicing.commands import InvoiceGenerateRequest
from engines.invoicing.models import Invoice
from engines.invoicing.services import generate_invoice
from engines.orders.commands import OrderCreateRequest, OrderLineInput, OrderUpdateRequest
from engines.orders.models import Order
from engines.orders.services import create_order, update_order
from engines.payments.commands import PaymentRecordRequest
from engines.payments.models import Payment
from engines.payments.services import record_payment
from engines.procurement.commands import (
    PurchaseLineInput,
    PurchaseOrderCreateRequest,
    VendorCreateRequest,
)
from engines.procurement.models import PurchaseOrder, Vendor, VendorBill
from engines.procurement.services import (
    create_purchase_order,
    create_vendor,
    receive_purchase_order,
)
from engines.stores.models import Store

pytestmark = pytest.mark.django_db(transaction=True)


@pytest.fixture
def busy_ledger(admin, store, masala, numbering, clock):
    """One paid-in-part invoice, one draft order and one received purchase."""
    now = clock.now_utc()

    invoiced = create_order(
        OrderCreateRequest(store_id=store.id, items=(OrderLineInput(product_id=masala.id, quantity=10),)),
        actor=admin,
        numbering=numbering,
        now=now,
    )
    for status in ("submitted", "approved"):
        update_order(OrderUpdateRequest(order_id=invoiced.id, status=status), actor=admin)
    invoice = generate_invoice(
        InvoiceGenerateRequest(order_id=invoiced.id),
        actor=admin,
        numbering=numbering,
        now=now,
    )
    record_payment(
        PaymentRecordRequest(invoice_id=invoice.id, amount="600"),
        actor=admin,
        numbering=numbering,
        now=now,
    )
    create_order(
        OrderCreateRequest(store_id=store.id, items=(OrderLineInput(product_id=masala.id, quantity=1),)),
        actor=admin,
        numbering=numbering,
        now=now,
    )

    chilli = create_raw_material(
        RawMaterialCreateRequest(name="Red Chilli", current_stock="5", min_stock="10"),
        actor=admin,
        now=now,
    )
    vendor = create_vendor(VendorCreateRequest(name="Spice Traders", phone="98"), actor=admin)
    purchase = create_purchase_order(
        PurchaseOrderCreateRequest(
            vendor_id=vendor.id,
            items=(PurchaseLineInput(raw_material_id=chilli.id, quantity="2", price="100"),),
        ),
        actor=admin,
        numbering=numbering,
        now=now,
    )
    receive_purchase_order(purchase.id, actor=admin, now=now)
    return chilli


def test_dashboard_summary(busy_ledger):
    payload = serialize_dashboard_summary(build_dashboard_summary())
    assert payload["order_counts"]["invoiced"] == 1
    assert payload["order_counts"]["draft"] == 1
    assert payload["order_counts"]["cancelled"] == 0
    assert payload["invoice_totals"] == {
        "invoiced": "1062.00",
        "collected": "600.00",
        "outstanding": "462.00",
    }
    assert payload["low_stock_count"] == 1


def test_empty_dashboard(db):
    payload = serialize_dashboard_summary(build_dashboard_summary())
    assert payload["invoice_totals"]["invoiced"] == "0.00"
    assert set(payload["order_counts"].values()) == {0}


def test_master_reset_clears_transactions_and_keeps_master_data(admin, busy_ledger):
    result = master_reset(MasterResetRequest(confirmation="RESET"), actor=admin)

    assert result.deleted["orders"] == 2
    assert result.raw_materials_reset == 1
    for model in (
        Payment,
        Invoice,
        Order,
        InventoryMovement,
        VendorBill,
        PurchaseOrder,
    ):
        assert model.objects.count() == 0

    busy_ledger.refresh_from_db()
    assert busy_ledger.current_stock == Decimal("0.000")
    assert RawMaterial.objects.count() == 1
    assert User.objects.count() == 2
    assert Store.objects.count() == 1
    assert Product.objects.count() == 1
    assert Vendor.objects.count() == 1


def test_master_reset_needs_exact_confirmation():
    with pytest.raises(ValueError):
        MasterResetRequest(confirmation="reset")


def test_master_reset_is_admin_only(captain):
    with pytest.raises(Forbidden):
        master_reset(MasterResetRequest(confirmation="RESET"), actor=captain)
