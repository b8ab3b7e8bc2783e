from __future__ import annotations

from decimal import Decimal

import pytest

from core.errors import (
    AmountExceedsBalance,
    Conflict,
    Forbidden,
    InvalidTransition,
    NonPositiveAmount,
    NotFound,
    ValidationError,
)
from engines.invoicing.commands import InvoiceGenerateRequest
from engines.invoicing.models import Invoice, InvoiceItem, InvoiceStatus
from engines.invoicing.services import (
    approve_invoice,
    delete_invoice,
    generate_invoice,
    list_invoices,
    serialize_invoice,
)
from engines.orders.commands import OrderCreateRequest, OrderLineInput, OrderUpdateRequest
from engines.orders.models import Order, OrderStatus
from engines.orders.services import create_order, update_order
from engines.payments.commands import PaymentRecordRequest
from engines.payments.models import Payment, PaymentMode
from engines.payments.reconciliation import balance_after_payment, balance_after_removal
from engines.payments.services import delete_payment, list_payments, record_payment

pytestmark = pytest.mark.django_db(transaction=True)


@pytest.fixture
def approved_order(captain, admin, store, masala, numbering, clock):
    """10 × 100.00 ordered by the captain and approved by the admin."""
    order = create_order(
        OrderCreateRequest(
            store_id=store.id,
            items=(OrderLineInput(product_id=masala.id, quantity=10),),
        ),
        actor=captain,
        numbering=numbering,
        now=clock.now_utc(),
    )
    update_order(OrderUpdateRequest(order_id=order.id, status=OrderStatus.SUBMITTED), actor=captain)
    update_order(OrderUpdateRequest(order_id=order.id, status=OrderStatus.APPROVED), actor=admin)
    order.refresh_from_db()
    return order


@pytest.fixture
def invoice(approved_order, admin, numbering, clock):
    return generate_invoice(
        InvoiceGenerateRequest(order_id=approved_order.id),
        actor=admin,
        numbering=numbering,
        now=clock.now_utc(),
    )


def _pay(invoice, amount, *, actor, numbering, clock, mode=PaymentMode.CASH):
    return record_payment(
        PaymentRecordRequest(invoice_id=invoice.id, amount=amount, payment_mode=mode),
        actor=actor,
        numbering=numbering,
        now=clock.now_utc(),
    )


# ── Generation ───────────────────────────────────────────────

def test_generate_uses_store_margin_and_product_gst(invoice, approved_order):
    assert invoice.invoice_number == "2026-27/1"
    assert invoice.status == InvoiceStatus.DRAFT
    assert invoice.subtotal == Decimal("1000.00")
    assert invoice.discount_percent == Decimal("10")
    assert invoice.discount_amount == Decimal("100.00")
    assert invoice.gst_amount == Decimal("162.00")
    assert invoice.total_amount == Decimal("1062.00")
    assert invoice.paid_amount == Decimal("0")
    assert invoice.balance_amount == Decimal("1062.00")

    approved_order.refresh_from_db()
    assert approved_order.status == OrderStatus.INVOICED

    item = InvoiceItem.objects.get(invoice=invoice)
    assert item.list_price == Decimal("100.00")
    assert item.price == Decimal("90.00")
    assert item.total == Decimal("1062.00")


def test_explicit_discount_overrides_store_margin(approved_order, admin, store, numbering, clock):
    invoice = generate_invoice(
        InvoiceGenerateRequest(
            order_id=approved_order.id,
            discount_percent="0",
            update_store_margin=True,
        ),
        actor=admin,
        numbering=numbering,
        now=clock.now_utc(),
    )
    assert invoice.total_amount == Decimal("1180.00")
    store.refresh_from_db()
    assert store.margin_discount_percent == Decimal("0")


def test_per_product_discount(approved_order, admin, masala, numbering, clock):
    invoice = generate_invoice(
        InvoiceGenerateRequest(
            order_id=approved_order.id,
            product_discounts={str(masala.id): "20"},
        ),
        actor=admin,
        numbering=numbering,
        now=clock.now_utc(),
    )
    assert invoice.discount_amount == Decimal("200.00")
    assert invoice.total_amount == Decimal("944.00")


def test_one_invoice_per_order(invoice, approved_order, admin, numbering, clock):
    with pytest.raises(Conflict):
        generate_invoice(
            InvoiceGenerateRequest(order_id=approved_order.id),
            actor=admin,
            numbering=numbering,
            now=clock.now_utc(),
        )
    assert Invoice.objects.count() == 1


def test_only_approved_orders_are_invoiced(captain, admin, store, masala, numbering, clock):
    order = create_order(
        OrderCreateRequest(store_id=store.id, items=(OrderLineInput(product_id=masala.id, quantity=1),)),
        actor=captain,
        numbering=numbering,
        now=clock.now_utc(),
    )
    with pytest.raises(InvalidTransition):
        generate_invoice(
            InvoiceGenerateRequest(order_id=order.id),
            actor=admin,
            numbering=numbering,
            now=clock.now_utc(),
        )
    assert Invoice.objects.count() == 0


def test_sales_captain_cannot_generate(approved_order, captain, numbering, clock):
    with pytest.raises(Forbidden):
        generate_invoice(
            InvoiceGenerateRequest(order_id=approved_order.id),
            actor=captain,
            numbering=numbering,
            now=clock.now_utc(),
        )


def test_zero_total_invoice_is_not_generated(approved_order, admin, numbering, clock):
    with pytest.raises(ValidationError):
        generate_invoice(
            InvoiceGenerateRequest(order_id=approved_order.id, discount_percent="100"),
            actor=admin,
            numbering=numbering,
            now=clock.now_utc(),
        )
    approved_order.refresh_from_db()
    assert approved_order.status == OrderStatus.APPROVED
    assert Invoice.objects.count() == 0


def test_approve_moves_draft_to_unpaid(invoice, admin, clock):
    approved = approve_invoice(invoice.id, actor=admin, now=clock.now_utc())
    assert approved.status == InvoiceStatus.UNPAID
    assert approved.approved_at == clock.now_utc()
    with pytest.raises(InvalidTransition):
        approve_invoice(invoice.id, actor=admin, now=clock.now_utc())


def test_detail_serialization_carries_tax_summary(invoice):
    payload = serialize_invoice(invoice, include_details=True)
    assert payload["total_amount"] == "1062.00"
    assert len(payload["items"]) == 1
    assert payload["payments"] == []
    assert payload["tax_summary"]["cgst_amount"] == "81.00"
    assert payload["tax_summary"]["sgst_amount"] == "81.00"


def test_list_invoices_filters_by_status(invoice):
    assert [row.id for row in list_invoices(status=InvoiceStatus.DRAFT)] == [invoice.id]
    assert list_invoices(status=InvoiceStatus.PAID) == ()


# ── Payments ─────────────────────────────────────────────────

def test_partial_then_full_payment_and_delete(invoice, admin, captain, numbering, clock):
    first = _pay(invoice, "600", actor=captain, numbering=numbering, clock=clock)
    invoice.refresh_from_db()
    assert first.payment_number == "PAY2610190001"
    assert invoice.paid_amount == Decimal("600.00")
    assert invoice.balance_amount == Decimal("462.00")
    assert invoice.status == InvoiceStatus.PARTIAL

    with pytest.raises(AmountExceedsBalance):
        _pay(invoice, "462.01", actor=captain, numbering=numbering, clock=clock)

    second = _pay(invoice, "462", actor=captain, numbering=numbering, clock=clock, mode=PaymentMode.UPI)
    invoice.refresh_from_db()
    assert invoice.balance_amount == Decimal("0.00")
    assert invoice.status == InvoiceStatus.PAID

    restored = delete_payment(second.id, actor=admin)
    assert restored.paid_amount == Decimal("600.00")
    assert restored.balance_amount == Decimal("462.00")
    assert restored.status == InvoiceStatus.PARTIAL

    delete_payment(first.id, actor=admin)
    invoice.refresh_from_db()
    assert invoice.paid_amount == Decimal("0.00")
    assert invoice.status == InvoiceStatus.UNPAID


@pytest.mark.parametrize("amount", ["0", "-5"])
def test_non_positive_payment_is_rejected(invoice, captain, numbering, clock, amount):
    with pytest.raises(NonPositiveAmount):
        _pay(invoice, amount, actor=captain, numbering=numbering, clock=clock)
    assert Payment.objects.count() == 0


def test_payment_on_unknown_invoice(captain, numbering, clock):
    with pytest.raises(NotFound):
        record_payment(
            PaymentRecordRequest(invoice_id="8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10", amount="10"),
            actor=captain,
            numbering=numbering,
            now=clock.now_utc(),
        )


def test_only_admin_deletes_payments(invoice, captain, numbering, clock):
    payment = _pay(invoice, "100", actor=captain, numbering=numbering, clock=clock)
    with pytest.raises(Forbidden):
        delete_payment(payment.id, actor=captain)


def test_sales_captain_lists_only_own_payments(invoice, admin, captain, numbering, clock):
    _pay(invoice, "100", actor=captain, numbering=numbering, clock=clock)
    _pay(invoice, "50", actor=admin, numbering=numbering, clock=clock)
    assert [payment.amount for payment in list_payments(actor=captain)] == [Decimal("100.00")]
    assert len(list_payments(actor=admin, invoice_id=invoice.id)) == 2


def test_payment_delete_rolls_back_when_invoice_update_fails(invoice, admin, numbering, clock, monkeypatch):
    payment = _pay(invoice, "600", actor=admin, numbering=numbering, clock=clock)

    def _fail(invoice, balance):
        raise RuntimeError("invoice row unavailable")

    monkeypatch.setattr("engines.payments.services._apply_balance", _fail)
    with pytest.raises(RuntimeError):
        delete_payment(payment.id, actor=admin)

    assert Payment.objects.filter(id=payment.id).exists()
    invoice.refresh_from_db()
    assert invoice.paid_amount == Decimal("600.00")
    assert invoice.balance_amount == Decimal("462.00")
    assert invoice.status == InvoiceStatus.PARTIAL


def test_payment_deleted_concurrently_is_not_subtracted_twice(invoice, admin, numbering, clock, monkeypatch):
    import engines.payments.services as payment_services

    first = _pay(invoice, "600", actor=admin, numbering=numbering, clock=clock)
    second = _pay(invoice, "462", actor=admin, numbering=numbering, clock=clock)
    lock_invoice = payment_services._lock_invoice

    def _lock_after_other_delete(invoice_id):
        # Another request removed the payment and committed while this one waited.
        Payment.objects.filter(id=second.id).delete()
        return lock_invoice(invoice_id)

    monkeypatch.setattr(payment_services, "_lock_invoice", _lock_after_other_delete)
    with pytest.raises(NotFound):
        delete_payment(second.id, actor=admin)

    invoice.refresh_from_db()
    assert invoice.paid_amount == first.amount + second.amount
    assert invoice.balance_amount == Decimal("0.00")


# ── Invoice deletion ─────────────────────────────────────────

def test_delete_invoice_reverts_order_to_approved(invoice, approved_order, admin):
    delete_invoice(invoice.id, actor=admin)
    approved_order.refresh_from_db()
    assert approved_order.status == OrderStatus.APPROVED
    assert InvoiceItem.objects.count() == 0


def test_invoice_with_payments_cannot_be_deleted(invoice, approved_order, admin, numbering, clock):
    _pay(invoice, "10", actor=admin, numbering=numbering, clock=clock)
    with pytest.raises(InvalidTransition):
        delete_invoice(invoice.id, actor=admin)
    approved_order.refresh_from_db()
    assert approved_order.status == OrderStatus.INVOICED


def test_invoice_delete_rolls_back_when_order_reversion_fails(invoice, approved_order, admin, monkeypatch):
    def _fail(self, *args, **kwargs):
        raise RuntimeError("order row unavailable")

    monkeypatch.setattr(Order, "save", _fail)
    with pytest.raises(RuntimeError):
        delete_invoice(invoice.id, actor=admin)
    monkeypatch.undo()

    assert Invoice.objects.filter(id=invoice.id).exists()
    assert InvoiceItem.objects.filter(invoice_id=invoice.id).count() == 1
    approved_order.refresh_from_db()
    assert approved_order.status == OrderStatus.INVOICED


# ── Reconciliation arithmetic ────────────────────────────────

class TestBalanceArithmetic:
    def test_exact_payment_settles(self):
        balance = balance_after_payment(
            total_amount=Decimal("1062.00"),
            paid_amount=Decimal("600.00"),
            amount=Decimal("462.00"),
        )
        assert balance.balance_amount == Decimal("0.00")
        assert balance.status == InvoiceStatus.PAID

    def test_removal_never_goes_negative(self):
        balance = balance_after_removal(
            total_amount=Decimal("100.00"),
            paid_amount=Decimal("10.00"),
            amount=Decimal("25.00"),
        )
        assert balance.paid_amount == Decimal("0")
        assert balance.balance_amount == Decimal("100.00")
        assert balance.status == InvoiceStatus.UNPAID
