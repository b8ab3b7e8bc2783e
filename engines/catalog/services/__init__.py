"""
ERP Catalog Engine — Service
============================
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import IntegrityError, transaction

from core.context.actor_context import ActorContext
from core.errors import Conflict, NotFound
from core.permissions import PERMISSION_PRODUCTS_MANAGE, require_permission
from core.primitives import canonical_uuid, money_str, quantity_str
from engines.catalog.commands import ProductCreateRequest, ProductUpdateRequest
from engines.catalog.models import Product

logger = logging.getLogger("erp.catalog")


def serialize_product(product: Product) -> dict[str, Any]:
    return {
        "id": str(product.id),
        "name": product.name,
        "sku": product.sku,
        "weight": quantity_str(product.weight),
        "weight_unit": product.weight_unit,
        "mrp": money_str(product.mrp),
        "gst_percent": money_str(product.gst_percent),
        "hsn_code": product.hsn_code,
        "is_active": product.is_active,
    }


def get_product(product_id: Any) -> Product:
    product = Product.objects.filter(
        id=canonical_uuid(product_id, field_name="product_id")
    ).first()
    if product is None:
        raise NotFound(f"Product '{product_id}' not found.")
    return product


def list_products(*, is_active: Optional[bool] = True) -> tuple[Product, ...]:
    rows = Product.objects.all()
    if is_active is not None:
        rows = rows.filter(is_active=is_active)
    return tuple(rows.order_by("name", "id"))


def create_product(request: ProductCreateRequest, *, actor: ActorContext) -> Product:
    require_permission(actor, PERMISSION_PRODUCTS_MANAGE, policy_name="create_product")
    try:
        with transaction.atomic():
            product = Product.objects.create(
                name=request.name,
                sku=request.sku,
                weight=request.weight,
                weight_unit=request.weight_unit,
                mrp=request.mrp,
                gst_percent=request.gst_percent,
                hsn_code=request.hsn_code,
            )
    except IntegrityError as exc:
        raise Conflict(f"SKU '{request.sku}' is already in use.") from exc
    logger.info(f"Product {product.id} ({product.name}) created by {actor.user_id}.")
    return product


def update_product(request: ProductUpdateRequest, *, actor: ActorContext) -> Product:
    require_permission(actor, PERMISSION_PRODUCTS_MANAGE, policy_name="update_product")
    product = get_product(request.product_id)
    for key, value in request.changes.items():
        setattr(product, key, value)
    try:
        with transaction.atomic():
            product.save(update_fields=[*request.changes.keys(), "updated_at"])
    except IntegrityError as exc:
        raise Conflict(f"SKU '{product.sku}' is already in use.") from exc
    logger.info(f"Product {product.id} updated.")
    return product


def deactivate_product(product_id: Any, *, actor: ActorContext) -> Product:
    require_permission(
        actor, PERMISSION_PRODUCTS_MANAGE, policy_name="deactivate_product"
    )
    product = get_product(product_id)
    if product.is_active:
        product.is_active = False
        product.save(update_fields=["is_active", "updated_at"])
        logger.info(f"Product {product.id} deactivated by {actor.user_id}.")
    return product
