from __future__ import annotations

from decimal import Decimal

import pytest

from core.errors import Forbidden, InvalidTransition, NotFound, ValidationError
from engines.orders.commands import OrderCreateRequest, OrderLineInput, OrderUpdateRequest
from engines.orders.models import Order, OrderItem, OrderStatus
from engines.orders.policies import ORDER_TRANSITIONS, can_transition
from engines.orders.services import (
    approved_orders_by_store,
    create_order,
    delete_order,
    get_order,
    list_orders,
    pending_product_demand,
    serialize_order,
    serialize_product_demand,
    serialize_store_orders,
    update_order,
)
from engines.stores.models import Store

pytestmark = pytest.mark.django_db(transaction=True)


def _order(store, product, *, actor, numbering, clock, quantity=10, price=None):
    request = OrderCreateRequest(
        store_id=store.id,
        items=(OrderLineInput(product_id=product.id, quantity=quantity, price=price),),
    )
    return create_order(request, actor=actor, numbering=numbering, now=clock.now_utc())


def _set_status(order, status, *, actor):
    return update_order(OrderUpdateRequest(order_id=order.id, status=status), actor=actor)


# ── State machine ────────────────────────────────────────────

class TestTransitionTable:
    def test_forward_path(self):
        assert can_transition(OrderStatus.DRAFT, OrderStatus.SUBMITTED)
        assert can_transition(OrderStatus.SUBMITTED, OrderStatus.APPROVED)
        assert can_transition(OrderStatus.APPROVED, OrderStatus.INVOICED)

    def test_terminal_states_have_no_exits(self):
        assert ORDER_TRANSITIONS[OrderStatus.INVOICED] == frozenset()
        assert ORDER_TRANSITIONS[OrderStatus.CANCELLED] == frozenset()

    def test_cannot_skip_submission(self):
        assert not can_transition(OrderStatus.DRAFT, OrderStatus.APPROVED)


# ── Create ───────────────────────────────────────────────────

def test_create_order_prices_lines_from_mrp(captain, store, masala, turmeric, numbering, clock):
    request = OrderCreateRequest(
        store_id=store.id,
        items=(
            OrderLineInput(product_id=masala.id, quantity=10),
            OrderLineInput(product_id=turmeric.id, quantity=2, price="40"),
        ),
        notes="  first visit ",
    )
    order = create_order(request, actor=captain, numbering=numbering, now=clock.now_utc())

    assert order.status == OrderStatus.DRAFT
    assert order.order_number == "ORD2610190001"
    assert order.total_amount == Decimal("1080.00")
    assert order.notes == "first visit"
    assert OrderItem.objects.filter(order=order).count() == 2

    payload = serialize_order(order, include_items=True)
    assert payload["total_amount"] == "1080.00"
    assert sorted(item["total"] for item in payload["items"]) == ["1000.00", "80.00"]


def test_order_numbers_advance_within_the_day(captain, store, masala, numbering, clock):
    first = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    second = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    assert (first.order_number, second.order_number) == ("ORD2610190001", "ORD2610190002")


def test_create_order_rejects_unknown_product(captain, store, numbering, clock):
    request = OrderCreateRequest(
        store_id=store.id,
        items=(OrderLineInput(product_id="8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10", quantity=1),),
    )
    with pytest.raises(NotFound):
        create_order(request, actor=captain, numbering=numbering, now=clock.now_utc())
    assert Order.objects.count() == 0


def test_create_order_rejects_inactive_store(captain, store, masala, numbering, clock):
    store.is_active = False
    store.save()
    with pytest.raises(ValidationError):
        _order(store, masala, actor=captain, numbering=numbering, clock=clock)


def test_order_request_needs_items():
    with pytest.raises(ValueError):
        OrderCreateRequest(store_id="8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10", items=())


def test_order_line_needs_positive_quantity():
    with pytest.raises(ValueError):
        OrderLineInput(product_id="8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10", quantity=0)


def test_order_line_quantity_has_an_upper_bound():
    with pytest.raises(ValueError):
        OrderLineInput(product_id="8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10", quantity=10**15)


# ── Transitions ──────────────────────────────────────────────

def test_submit_then_admin_approves(captain, admin, store, masala, numbering, clock):
    order = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    _set_status(order, OrderStatus.SUBMITTED, actor=captain)
    _set_status(order, OrderStatus.APPROVED, actor=admin)
    order.refresh_from_db()
    assert order.status == OrderStatus.APPROVED


def test_sales_captain_cannot_approve(captain, store, masala, numbering, clock):
    order = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    _set_status(order, OrderStatus.SUBMITTED, actor=captain)
    with pytest.raises(Forbidden):
        _set_status(order, OrderStatus.APPROVED, actor=captain)
    order.refresh_from_db()
    assert order.status == OrderStatus.SUBMITTED


def test_skipping_a_state_is_an_invalid_transition(admin, store, masala, numbering, clock):
    order = _order(store, masala, actor=admin, numbering=numbering, clock=clock)
    with pytest.raises(InvalidTransition):
        _set_status(order, OrderStatus.APPROVED, actor=admin)


def test_invoiced_cannot_be_set_by_hand(admin, store, masala, numbering, clock):
    order = _order(store, masala, actor=admin, numbering=numbering, clock=clock)
    _set_status(order, OrderStatus.SUBMITTED, actor=admin)
    _set_status(order, OrderStatus.APPROVED, actor=admin)
    with pytest.raises(ValidationError):
        _set_status(order, OrderStatus.INVOICED, actor=admin)


def test_cancelled_is_terminal(captain, store, masala, numbering, clock):
    order = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    _set_status(order, OrderStatus.CANCELLED, actor=captain)
    with pytest.raises(InvalidTransition):
        _set_status(order, OrderStatus.SUBMITTED, actor=captain)


def test_update_notes_only(captain, store, masala, numbering, clock):
    order = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    update_order(OrderUpdateRequest(order_id=order.id, notes="call before delivery"), actor=captain)
    order.refresh_from_db()
    assert order.notes == "call before delivery"
    assert order.status == OrderStatus.DRAFT


# ── Visibility & delete ──────────────────────────────────────

def test_sales_captain_sees_only_own_orders(
    captain, other_captain, admin, store, masala, numbering, clock
):
    mine = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    _order(store, masala, actor=other_captain, numbering=numbering, clock=clock)

    assert [order.id for order in list_orders(actor=captain)] == [mine.id]
    assert len(list_orders(actor=admin)) == 2
    with pytest.raises(Forbidden):
        get_order(mine.id, actor=other_captain)


def test_list_orders_rejects_unknown_status(admin):
    with pytest.raises(ValidationError):
        list_orders(actor=admin, status="shipped")


def test_owner_deletes_draft(captain, store, masala, numbering, clock):
    order = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    delete_order(order.id, actor=captain)
    assert not Order.objects.filter(id=order.id).exists()
    assert OrderItem.objects.count() == 0


def test_other_captain_cannot_delete(captain, other_captain, store, masala, numbering, clock):
    order = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    with pytest.raises(Forbidden):
        delete_order(order.id, actor=other_captain)


def test_only_admin_deletes_approved_order(captain, admin, store, masala, numbering, clock):
    order = _order(store, masala, actor=captain, numbering=numbering, clock=clock)
    _set_status(order, OrderStatus.SUBMITTED, actor=captain)
    _set_status(order, OrderStatus.APPROVED, actor=admin)
    with pytest.raises(Forbidden):
        delete_order(order.id, actor=captain)
    delete_order(order.id, actor=admin)
    assert not Order.objects.filter(id=order.id).exists()


# ── Fulfilment queries ───────────────────────────────────────

def _approved(store, product, *, actor, admin, numbering, clock, quantity):
    order = _order(store, product, actor=actor, numbering=numbering, clock=clock, quantity=quantity)
    _set_status(order, OrderStatus.SUBMITTED, actor=actor)
    return _set_status(order, OrderStatus.APPROVED, actor=admin)


def test_pending_demand_sums_approved_orders_only(
    captain, admin, store, masala, turmeric, numbering, clock
):
    _approved(store, masala, actor=captain, admin=admin, numbering=numbering, clock=clock, quantity=10)
    _approved(store, masala, actor=captain, admin=admin, numbering=numbering, clock=clock, quantity=5)
    _approved(store, turmeric, actor=captain, admin=admin, numbering=numbering, clock=clock, quantity=2)
    _order(store, masala, actor=captain, numbering=numbering, clock=clock, quantity=99)

    rows = [serialize_product_demand(row) for row in pending_product_demand(actor=admin)]
    assert rows == [
        {
            "product_id": str(masala.id),
            "product_name": "Garam Masala 100g",
            "sku": "GM-100",
            "quantity": 15,
            "order_count": 2,
        },
        {
            "product_id": str(turmeric.id),
            "product_name": "Turmeric 200g",
            "sku": "TU-200",
            "quantity": 2,
            "order_count": 1,
        },
    ]


def test_approved_orders_grouped_by_store(captain, admin, area, store, masala, numbering, clock):
    corner = Store.objects.create(name="Corner Mart", area=area)
    _approved(store, masala, actor=captain, admin=admin, numbering=numbering, clock=clock, quantity=10)
    _approved(corner, masala, actor=captain, admin=admin, numbering=numbering, clock=clock, quantity=1)
    _approved(store, masala, actor=captain, admin=admin, numbering=numbering, clock=clock, quantity=2)

    groups = [serialize_store_orders(entry) for entry in approved_orders_by_store(actor=admin)]
    assert [(g["store_name"], g["order_count"], g["total_amount"]) for g in groups] == [
        ("Corner Mart", 1, "100.00"),
        ("Lakshmi Stores", 2, "1200.00"),
    ]
    assert all(order["status"] == "approved" for g in groups for order in g["orders"])
    assert sorted(order["items"][0]["quantity"] for order in groups[1]["orders"]) == [2, 10]


def test_fulfilment_queries_are_scoped_for_sales_captains(
    captain, other_captain, admin, store, masala, numbering, clock
):
    _approved(store, masala, actor=captain, admin=admin, numbering=numbering, clock=clock, quantity=3)
    _approved(store, masala, actor=other_captain, admin=admin, numbering=numbering, clock=clock, quantity=4)

    assert [row.quantity for row in pending_product_demand(actor=captain)] == [3]
    assert [row.quantity for row in pending_product_demand(actor=admin)] == [7]
    assert [len(entry.orders) for entry in approved_orders_by_store(actor=other_captain)] == [1]
