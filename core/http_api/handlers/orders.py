"""
ERP HTTP API - Order Handlers
=============================
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import (
    authenticated,
    list_payload,
    object_list,
    optional_text,
)
from engines.orders.commands import OrderCreateRequest, OrderLineInput, OrderUpdateRequest
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


def get_orders(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        orders = list_orders(
            actor=actor,
            status=optional_text(params, "status"),
            store_id=params.get("store_id") or None,
        )
        return list_payload(serialize_order(order) for order in orders)

    return authenticated(dependencies, headers, operation="orders.list", call=_call)


def get_order_detail(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="orders.get",
        call=lambda actor: serialize_order(
            get_order(params.get("order_id"), actor=actor),
            include_items=True,
        ),
    )


def post_order_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = OrderCreateRequest(
            store_id=params.get("store_id"),
            items=tuple(
                OrderLineInput(
                    product_id=line.get("product_id"),
                    quantity=line.get("quantity"),
                    price=line.get("price"),
                    available_quantity=line.get("available_quantity"),
                )
                for line in object_list(params, "items")
            ),
            notes=params.get("notes", ""),
        )
        order = create_order(
            request,
            actor=actor,
            numbering=dependencies.numbering,
            now=dependencies.clock.now_utc(),
        )
        return serialize_order(order, include_items=True)

    return authenticated(dependencies, headers, operation="orders.create", call=_call)


def post_order_update(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = OrderUpdateRequest(
            order_id=params.get("order_id"),
            status=params.get("status"),
            notes=params.get("notes"),
        )
        return serialize_order(update_order(request, actor=actor), include_items=True)

    return authenticated(dependencies, headers, operation="orders.update", call=_call)


def post_order_delete(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        delete_order(params.get("order_id"), actor=actor)
        return {"deleted": True, "id": str(params.get("order_id"))}

    return authenticated(dependencies, headers, operation="orders.delete", call=_call)


def get_pending_demand(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="orders.pending_demand",
        call=lambda actor: list_payload(
            serialize_product_demand(row) for row in pending_product_demand(actor=actor)
        ),
    )


def get_store_orders(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="orders.by_store",
        call=lambda actor: list_payload(
            serialize_store_orders(entry) for entry in approved_orders_by_store(actor=actor)
        ),
    )
