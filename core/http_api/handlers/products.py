"""
ERP HTTP API - Product Handlers
===============================
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import (
    authenticated,
    changes_from,
    list_payload,
    optional_bool,
)
from engines.catalog.commands import ProductCreateRequest, ProductUpdateRequest
from engines.catalog.models import DEFAULT_GST_PERCENT
from engines.catalog.services import (
    create_product,
    deactivate_product,
    get_product,
    list_products,
    serialize_product,
    update_product,
)


def get_products(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        # Active products unless the caller asks otherwise; "all" lists both.
        if params.get("is_active") == "all":
            is_active = None
        else:
            is_active = optional_bool(params, "is_active")
            if is_active is None:
                is_active = True
        return list_payload(
            serialize_product(product) for product in list_products(is_active=is_active)
        )

    return authenticated(dependencies, headers, operation="products.list", call=_call)


def get_product_detail(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="products.get",
        call=lambda actor: serialize_product(get_product(params.get("product_id"))),
    )


def post_product_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = ProductCreateRequest(
            name=params.get("name"),
            mrp=params.get("mrp"),
            sku=params.get("sku"),
            weight=params.get("weight"),
            weight_unit=params.get("weight_unit") or "g",
            gst_percent=params.get("gst_percent", DEFAULT_GST_PERCENT),
            hsn_code=params.get("hsn_code", ""),
        )
        return serialize_product(create_product(request, actor=actor))

    return authenticated(dependencies, headers, operation="products.create", call=_call)


def post_product_update(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = ProductUpdateRequest(
            product_id=params.get("product_id"),
            changes=changes_from(params, exclude=("product_id",)),
        )
        return serialize_product(update_product(request, actor=actor))

    return authenticated(dependencies, headers, operation="products.update", call=_call)


def post_product_delete(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="products.delete",
        call=lambda actor: serialize_product(
            deactivate_product(params.get("product_id"), actor=actor)
        ),
    )
