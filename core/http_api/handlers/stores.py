"""
ERP HTTP API - Area and Store Handlers
======================================
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import (
    authenticated,
    changes_from,
    list_payload,
    optional_bool,
)
from engines.stores.commands import (
    STORE_TEXT_FIELDS,
    AreaCreateRequest,
    StoreCreateRequest,
    StoreUpdateRequest,
)
from engines.stores.services import (
    create_area,
    create_store,
    deactivate_store,
    get_store,
    list_areas,
    list_stores,
    serialize_area,
    serialize_store,
    update_store,
)


def get_areas(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="areas.list",
        call=lambda actor: list_payload(serialize_area(area) for area in list_areas()),
    )


def post_area_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = AreaCreateRequest(
            name=params.get("name"),
            sales_captain_id=params.get("sales_captain_id"),
        )
        return serialize_area(create_area(request, actor=actor))

    return authenticated(dependencies, headers, operation="areas.create", call=_call)


def get_stores(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        stores = list_stores(
            area_id=params.get("area_id") or None,
            is_active=optional_bool(params, "is_active"),
        )
        return list_payload(serialize_store(store) for store in stores)

    return authenticated(dependencies, headers, operation="stores.list", call=_call)


def get_store_detail(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="stores.get",
        call=lambda actor: serialize_store(get_store(params.get("store_id"))),
    )


def post_store_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        text_fields = {key: params.get(key, "") for key in STORE_TEXT_FIELDS}
        request = StoreCreateRequest(
            name=params.get("name"),
            area_id=params.get("area_id"),
            margin_discount_percent=params.get("margin_discount_percent"),
            **text_fields,
        )
        return serialize_store(create_store(request, actor=actor))

    return authenticated(dependencies, headers, operation="stores.create", call=_call)


def post_store_update(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = StoreUpdateRequest(
            store_id=params.get("store_id"),
            changes=changes_from(params, exclude=("store_id",)),
        )
        return serialize_store(update_store(request, actor=actor))

    return authenticated(dependencies, headers, operation="stores.update", call=_call)


def post_store_delete(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="stores.delete",
        call=lambda actor: serialize_store(
            deactivate_store(params.get("store_id"), actor=actor)
        ),
    )
