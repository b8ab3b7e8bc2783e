"""
ERP Orders Engine — Service
===========================
Order lifecycle: create → submit → approve → (invoice) | cancel.

Every multi-row write runs in one transaction.atomic() block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from itertools import groupby
from decimal import Decimal
from typing import Any, Optional

from django.db import transaction
from django.db.models import Count, Sum

from core.context.actor_context import ActorContext
from core.documents.numbering import DOC_ORDER, NumberingProvider, issue_document_number
from core.errors import NotFound, ValidationError, raise_for_rejection
from core.permissions import (
    PERMISSION_ORDERS_CREATE,
    PERMISSION_ORDERS_VIEW_ALL,
    has_permission,
    require_permission,
)
from core.primitives import ZERO, canonical_uuid, money_str, quantize_money
from engines.catalog.models import Product
from engines.orders.commands import OrderCreateRequest, OrderUpdateRequest
from engines.orders.models import Order, OrderItem, OrderStatus
from engines.orders.policies import (
    manual_status_update_policy,
    order_delete_policy,
    order_transition_policy,
    order_visibility_policy,
)
from engines.stores.models import Store

logger = logging.getLogger("erp.orders")


# ══════════════════════════════════════════════════════════════
# SERIALIZATION
# ══════════════════════════════════════════════════════════════

def serialize_order_item(item: OrderItem) -> dict[str, Any]:
    return {
        "id": str(item.id),
        "product_id": str(item.product_id),
        "product_name": item.product.name,
        "quantity": item.quantity,
        "price": money_str(item.price),
        "total": money_str(item.total),
        "available_quantity": item.available_quantity,
    }


def serialize_order(order: Order, *, include_items: bool = False) -> dict[str, Any]:
    data = {
        "id": str(order.id),
        "order_number": order.order_number,
        "store_id": str(order.store_id),
        "store_name": order.store.name,
        "created_by_id": str(order.created_by_id),
        "status": order.status,
        "total_amount": money_str(order.total_amount),
        "notes": order.notes,
        "created_at": order.created_at.isoformat(),
        "updated_at": order.updated_at.isoformat(),
    }
    if include_items:
        data["items"] = [
            serialize_order_item(item)
            for item in order.items.select_related("product").order_by("id")
        ]
    return data


# ══════════════════════════════════════════════════════════════
# QUERIES
# ══════════════════════════════════════════════════════════════

def _load_order(order_id: Any, *, for_update: bool = False) -> Order:
    rows = Order.objects.select_related("store")
    if for_update:
        rows = rows.select_for_update()
    order = rows.filter(id=canonical_uuid(order_id, field_name="order_id")).first()
    if order is None:
        raise NotFound(f"Order '{order_id}' not found.")
    return order


def get_order(order_id: Any, *, actor: ActorContext) -> Order:
    order = _load_order(order_id)
    raise_for_rejection(
        order_visibility_policy(created_by_id=order.created_by_id, actor=actor)
    )
    return order


def list_orders(
    *,
    actor: ActorContext,
    status: Optional[str] = None,
    store_id: Any = None,
) -> tuple[Order, ...]:
    rows = Order.objects.select_related("store")
    if not has_permission(actor, PERMISSION_ORDERS_VIEW_ALL):
        rows = rows.filter(created_by_id=actor.user_id)
    if status is not None:
        if status not in OrderStatus.values:
            raise ValidationError(f"Unknown order status '{status}'.")
        rows = rows.filter(status=status)
    if store_id is not None:
        rows = rows.filter(store_id=canonical_uuid(store_id, field_name="store_id"))
    return tuple(rows.order_by("-created_at", "id"))


# ══════════════════════════════════════════════════════════════
# FULFILMENT QUERIES (approved, not yet invoiced)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProductDemand:
    product_id: str
    product_name: str
    sku: Optional[str]
    quantity: int
    order_count: int


@dataclass(frozen=True)
class StoreOrders:
    store: Store
    orders: tuple[Order, ...]

    @property
    def total_amount(self) -> Decimal:
        return quantize_money(sum((order.total_amount for order in self.orders), ZERO))


def _approved_orders(actor: ActorContext):
    rows = Order.objects.filter(status=OrderStatus.APPROVED)
    if not has_permission(actor, PERMISSION_ORDERS_VIEW_ALL):
        rows = rows.filter(created_by_id=actor.user_id)
    return rows


def pending_product_demand(*, actor: ActorContext) -> tuple[ProductDemand, ...]:
    """Quantity still to be produced per product across approved orders."""
    rows = (
        OrderItem.objects.filter(order__in=_approved_orders(actor))
        .values("product_id", "product__name", "product__sku")
        .annotate(quantity=Sum("quantity"), order_count=Count("order", distinct=True))
        .order_by("product__name", "product_id")
    )
    return tuple(
        ProductDemand(
            product_id=str(row["product_id"]),
            product_name=row["product__name"],
            sku=row["product__sku"],
            quantity=row["quantity"],
            order_count=row["order_count"],
        )
        for row in rows
    )


def approved_orders_by_store(*, actor: ActorContext) -> tuple[StoreOrders, ...]:
    orders = (
        _approved_orders(actor)
        .select_related("store")
        .order_by("store__name", "store_id", "created_at", "id")
    )
    grouped = []
    for _, rows in groupby(orders, key=lambda order: order.store_id):
        rows = tuple(rows)
        grouped.append(StoreOrders(store=rows[0].store, orders=rows))
    return tuple(grouped)


def serialize_product_demand(demand: ProductDemand) -> dict[str, Any]:
    return {
        "product_id": demand.product_id,
        "product_name": demand.product_name,
        "sku": demand.sku,
        "quantity": demand.quantity,
        "order_count": demand.order_count,
    }


def serialize_store_orders(entry: StoreOrders) -> dict[str, Any]:
    return {
        "store_id": str(entry.store.id),
        "store_name": entry.store.name,
        "order_count": len(entry.orders),
        "total_amount": money_str(entry.total_amount),
        "orders": [serialize_order(order, include_items=True) for order in entry.orders],
    }


# ══════════════════════════════════════════════════════════════
# COMMANDS
# ══════════════════════════════════════════════════════════════

def _line_total(quantity: int, price: Decimal) -> Decimal:
    return quantize_money(Decimal(quantity) * price)


@transaction.atomic
def create_order(
    request: OrderCreateRequest,
    *,
    actor: ActorContext,
    numbering: NumberingProvider,
    now: datetime,
) -> Order:
    require_permission(actor, PERMISSION_ORDERS_CREATE, policy_name="create_order")

    store = Store.objects.filter(id=request.store_id).first()
    if store is None:
        raise NotFound(f"Store '{request.store_id}' not found.")
    if not store.is_active:
        raise ValidationError(f"Store '{store.name}' is inactive.")

    product_ids = {line.product_id for line in request.items}
    products = {
        product.id: product
        for product in Product.objects.filter(id__in=product_ids)
    }
    missing = sorted(str(pid) for pid in product_ids - set(products))
    if missing:
        raise NotFound(f"Products not found: {', '.join(missing)}.")

    order = Order.objects.create(
        order_number=issue_document_number(numbering, DOC_ORDER, now),
        store=store,
        created_by_id=actor.user_id,
        status=OrderStatus.DRAFT,
        total_amount=ZERO,
        notes=request.notes,
    )

    total_amount = ZERO
    items = []
    for line in request.items:
        product = products[line.product_id]
        price = product.mrp if line.price is None else quantize_money(line.price)
        line_total = _line_total(line.quantity, price)
        total_amount += line_total
        items.append(
            OrderItem(
                order=order,
                product=product,
                quantity=line.quantity,
                price=price,
                total=line_total,
                available_quantity=line.available_quantity,
            )
        )
    OrderItem.objects.bulk_create(items)

    order.total_amount = quantize_money(total_amount)
    order.save(update_fields=["total_amount", "updated_at"])

    logger.info(
        f"Order {order.order_number} created for store {store.id} "
        f"by {actor.user_id}: {len(items)} item(s), total {order.total_amount}."
    )
    return order


def transition_order(order: Order, target: str, *, actor: ActorContext) -> Order:
    """Apply one state-machine step to an already locked order."""
    raise_for_rejection(
        order_transition_policy(current=order.status, target=target, actor=actor)
    )
    previous = order.status
    order.status = target
    order.save(update_fields=["status", "updated_at"])
    logger.info(f"Order {order.order_number} moved {previous} → {target} by {actor.user_id}.")
    return order


@transaction.atomic
def update_order(request: OrderUpdateRequest, *, actor: ActorContext) -> Order:
    order = _load_order(request.order_id, for_update=True)
    raise_for_rejection(
        order_visibility_policy(created_by_id=order.created_by_id, actor=actor)
    )

    if request.status is not None:
        raise_for_rejection(manual_status_update_policy(request.status))
        transition_order(order, request.status, actor=actor)

    if request.notes is not None:
        order.notes = request.notes
        order.save(update_fields=["notes", "updated_at"])
    return order


@transaction.atomic
def delete_order(order_id: Any, *, actor: ActorContext) -> None:
    order = _load_order(order_id, for_update=True)
    raise_for_rejection(
        order_delete_policy(
            status=order.status,
            created_by_id=order.created_by_id,
            actor=actor,
        )
    )
    order_number = order.order_number
    order.delete()
    logger.info(f"Order {order_number} deleted by {actor.user_id}.")
