"""
ERP HTTP API - Inventory Handlers
=================================
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import authenticated, list_payload
from engines.inventory.commands import RawMaterialCreateRequest, StockMovementRequest
from engines.inventory.services import (
    create_raw_material,
    list_low_stock,
    list_movements,
    list_raw_materials,
    record_movement,
    serialize_movement,
    serialize_raw_material,
)


def get_raw_materials(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="inventory.list",
        call=lambda actor: list_payload(
            serialize_raw_material(material, recent_movements=recent)
            for material, recent in list_raw_materials()
        ),
    )


def post_raw_material_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = RawMaterialCreateRequest(
            name=params.get("name"),
            unit=params.get("unit") or "kg",
            current_stock=params.get("current_stock"),
            min_stock=params.get("min_stock"),
        )
        material = create_raw_material(
            request,
            actor=actor,
            now=dependencies.clock.now_utc(),
        )
        return serialize_raw_material(material)

    return authenticated(dependencies, headers, operation="inventory.create", call=_call)


def post_stock_movement(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = StockMovementRequest(
            raw_material_id=params.get("raw_material_id"),
            movement_type=params.get("type"),
            quantity=params.get("quantity"),
            notes=params.get("notes", ""),
        )
        material = record_movement(
            request,
            actor=actor,
            now=dependencies.clock.now_utc(),
        )
        return serialize_raw_material(material)

    return authenticated(dependencies, headers, operation="inventory.move", call=_call)


def get_movements(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="inventory.movements",
        call=lambda actor: list_payload(
            serialize_movement(movement)
            for movement in list_movements(params.get("raw_material_id"))
        ),
    )


def get_low_stock(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="inventory.low_stock",
        call=lambda actor: list_payload(
            serialize_raw_material(material) for material in list_low_stock()
        ),
    )
