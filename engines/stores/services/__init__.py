"""
ERP Stores Engine — Service
===========================
Areas and stores. Stores are deactivated, never deleted: orders and
invoices keep pointing at them.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import IntegrityError, transaction

from core.context.actor_context import ActorContext
from core.errors import Conflict, NotFound
from core.identity.models import User
from core.permissions import (
    PERMISSION_AREAS_MANAGE,
    PERMISSION_STORES_CREATE,
    PERMISSION_STORES_MANAGE,
    require_permission,
)
from core.primitives import canonical_uuid, money_str
from engines.stores.commands import (
    AreaCreateRequest,
    StoreCreateRequest,
    StoreUpdateRequest,
)
from engines.stores.models import Area, Store

logger = logging.getLogger("erp.stores")


def serialize_area(area: Area) -> dict[str, Any]:
    return {
        "id": str(area.id),
        "name": area.name,
        "sales_captain_id": (
            None if area.sales_captain_id is None else str(area.sales_captain_id)
        ),
    }


def serialize_store(store: Store) -> dict[str, Any]:
    return {
        "id": str(store.id),
        "name": store.name,
        "address": store.address,
        "city": store.city,
        "state": store.state,
        "pincode": store.pincode,
        "phone": store.phone,
        "email": store.email,
        "gst_number": store.gst_number,
        "contact_person": store.contact_person,
        "area_id": None if store.area_id is None else str(store.area_id),
        "margin_discount_percent": money_str(store.margin_discount_percent),
        "is_active": store.is_active,
        "created_at": store.created_at.isoformat(),
    }


def _resolve_area(area_id) -> Optional[Area]:
    if area_id is None:
        return None
    area = Area.objects.filter(id=area_id).first()
    if area is None:
        raise NotFound(f"Area '{area_id}' not found.")
    return area


def get_store(store_id: Any) -> Store:
    store = Store.objects.filter(
        id=canonical_uuid(store_id, field_name="store_id")
    ).first()
    if store is None:
        raise NotFound(f"Store '{store_id}' not found.")
    return store


def list_areas() -> tuple[Area, ...]:
    return tuple(Area.objects.order_by("name"))


def create_area(request: AreaCreateRequest, *, actor: ActorContext) -> Area:
    require_permission(actor, PERMISSION_AREAS_MANAGE, policy_name="create_area")
    sales_captain = None
    if request.sales_captain_id is not None:
        sales_captain = User.objects.filter(id=request.sales_captain_id).first()
        if sales_captain is None:
            raise NotFound(f"User '{request.sales_captain_id}' not found.")
    try:
        with transaction.atomic():
            area = Area.objects.create(name=request.name, sales_captain=sales_captain)
    except IntegrityError as exc:
        raise Conflict(f"Area '{request.name}' already exists.") from exc
    logger.info(f"Area {area.name} created by {actor.user_id}.")
    return area


def list_stores(
    *,
    area_id: Any = None,
    is_active: Optional[bool] = None,
) -> tuple[Store, ...]:
    rows = Store.objects.all()
    if area_id is not None:
        rows = rows.filter(area_id=canonical_uuid(area_id, field_name="area_id"))
    if is_active is not None:
        rows = rows.filter(is_active=is_active)
    return tuple(rows.order_by("name", "id"))


def create_store(request: StoreCreateRequest, *, actor: ActorContext) -> Store:
    require_permission(actor, PERMISSION_STORES_CREATE, policy_name="create_store")
    store = Store.objects.create(
        name=request.name,
        address=request.address,
        city=request.city,
        state=request.state,
        pincode=request.pincode,
        phone=request.phone,
        email=request.email,
        gst_number=request.gst_number,
        contact_person=request.contact_person,
        area=_resolve_area(request.area_id),
        margin_discount_percent=request.margin_discount_percent,
        created_by_id=actor.user_id,
    )
    logger.info(f"Store {store.id} ({store.name}) created by {actor.user_id}.")
    return store


@transaction.atomic
def update_store(request: StoreUpdateRequest, *, actor: ActorContext) -> Store:
    require_permission(actor, PERMISSION_STORES_MANAGE, policy_name="update_store")
    store = get_store(request.store_id)
    update_fields = ["updated_at"]
    for key, value in request.changes.items():
        if key == "area_id":
            store.area = _resolve_area(value)
            update_fields.append("area")
        else:
            setattr(store, key, value)
            update_fields.append(key)
    store.save(update_fields=update_fields)
    logger.info(f"Store {store.id} updated ({', '.join(update_fields[1:]) or 'no changes'}).")
    return store


def deactivate_store(store_id: Any, *, actor: ActorContext) -> Store:
    require_permission(actor, PERMISSION_STORES_MANAGE, policy_name="deactivate_store")
    store = get_store(store_id)
    if store.is_active:
        store.is_active = False
        store.save(update_fields=["is_active", "updated_at"])
        logger.info(f"Store {store.id} deactivated by {actor.user_id}.")
    return store
