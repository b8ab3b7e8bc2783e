"""
ERP Inventory Engine — Service
==============================
Every stock change goes through apply_movement(): the material row is
locked, the ledger row is written with stock before/after, then
current_stock is updated. Callers own the surrounding transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from django.db import IntegrityError, transaction
from django.db.models import F

from core.context.actor_context import ActorContext
from core.errors import Conflict, NotFound, raise_for_rejection
from core.permissions import (
    PERMISSION_INVENTORY_MANAGE,
    PERMISSION_INVENTORY_MOVE,
    require_permission,
)
from core.primitives import canonical_uuid, quantity_str
from engines.inventory.commands import RawMaterialCreateRequest, StockMovementRequest
from engines.inventory.models import InventoryMovement, MovementType, RawMaterial
from engines.inventory.policies import negative_stock_policy, stock_after_movement

logger = logging.getLogger("erp.inventory")

RECENT_MOVEMENT_LIMIT = 5
INITIAL_STOCK_NOTE = "Initial stock"


# ══════════════════════════════════════════════════════════════
# SERIALIZATION
# ══════════════════════════════════════════════════════════════

def serialize_movement(movement: InventoryMovement) -> dict[str, Any]:
    return {
        "id": str(movement.id),
        "raw_material_id": str(movement.raw_material_id),
        "type": movement.movement_type,
        "quantity": quantity_str(movement.quantity),
        "stock_before": quantity_str(movement.stock_before),
        "stock_after": quantity_str(movement.stock_after),
        "notes": movement.notes,
        "created_by_id": (
            None if movement.created_by_id is None else str(movement.created_by_id)
        ),
        "created_at": movement.created_at.isoformat(),
    }


def serialize_raw_material(
    material: RawMaterial,
    *,
    recent_movements: Optional[list[InventoryMovement]] = None,
) -> dict[str, Any]:
    data = {
        "id": str(material.id),
        "name": material.name,
        "unit": material.unit,
        "current_stock": quantity_str(material.current_stock),
        "min_stock": quantity_str(material.min_stock),
        "is_low_stock": material.is_low_stock,
        "is_active": material.is_active,
    }
    if recent_movements is not None:
        data["movements"] = [serialize_movement(m) for m in recent_movements]
    return data


# ══════════════════════════════════════════════════════════════
# LEDGER
# ══════════════════════════════════════════════════════════════

def apply_movement(
    raw_material_id: Any,
    *,
    movement_type: str,
    quantity: Decimal,
    notes: str,
    created_by_id: Optional[str],
    now: datetime,
) -> InventoryMovement:
    """Append one ledger row and move current_stock. Must run inside atomic()."""
    material = (
        RawMaterial.objects.select_for_update()
        .filter(id=raw_material_id)
        .first()
    )
    if material is None:
        raise NotFound(f"Raw material '{raw_material_id}' not found.")

    raise_for_rejection(
        negative_stock_policy(
            movement_type=movement_type,
            current_stock=material.current_stock,
            quantity=quantity,
            material_name=material.name,
        )
    )
    stock_before = material.current_stock
    stock_after = stock_after_movement(
        movement_type=movement_type,
        current_stock=stock_before,
        quantity=quantity,
    )

    movement = InventoryMovement.objects.create(
        raw_material=material,
        movement_type=movement_type,
        quantity=quantity,
        stock_before=stock_before,
        stock_after=stock_after,
        notes=notes,
        created_by_id=created_by_id,
        created_at=now,
    )
    material.current_stock = stock_after
    material.save(update_fields=["current_stock", "updated_at"])

    logger.info(
        f"Raw material {material.name}: {movement_type} {quantity} "
        f"({stock_before} → {stock_after})."
    )
    return movement


@transaction.atomic
def record_movement(
    request: StockMovementRequest,
    *,
    actor: ActorContext,
    now: datetime,
) -> RawMaterial:
    require_permission(actor, PERMISSION_INVENTORY_MOVE, policy_name="record_movement")
    movement = apply_movement(
        request.raw_material_id,
        movement_type=request.movement_type,
        quantity=request.quantity,
        notes=request.notes,
        created_by_id=actor.user_id,
        now=now,
    )
    return movement.raw_material


# ══════════════════════════════════════════════════════════════
# RAW MATERIALS
# ══════════════════════════════════════════════════════════════

@transaction.atomic
def create_raw_material(
    request: RawMaterialCreateRequest,
    *,
    actor: ActorContext,
    now: datetime,
) -> RawMaterial:
    require_permission(actor, PERMISSION_INVENTORY_MANAGE, policy_name="create_raw_material")
    try:
        with transaction.atomic():
            material = RawMaterial.objects.create(
                name=request.name,
                unit=request.unit,
                min_stock=request.min_stock,
            )
    except IntegrityError as exc:
        raise Conflict(f"Raw material '{request.name}' already exists.") from exc

    if request.current_stock > 0:
        apply_movement(
            material.id,
            movement_type=MovementType.IN,
            quantity=request.current_stock,
            notes=INITIAL_STOCK_NOTE,
            created_by_id=actor.user_id,
            now=now,
        )
        material.refresh_from_db()

    logger.info(f"Raw material {material.name} created by {actor.user_id}.")
    return material


def get_raw_material(raw_material_id: Any) -> RawMaterial:
    material = RawMaterial.objects.filter(
        id=canonical_uuid(raw_material_id, field_name="raw_material_id")
    ).first()
    if material is None:
        raise NotFound(f"Raw material '{raw_material_id}' not found.")
    return material


def list_raw_materials() -> list[tuple[RawMaterial, list[InventoryMovement]]]:
    """Active materials by name, each with its most recent movements."""
    result = []
    for material in RawMaterial.objects.filter(is_active=True).order_by("name"):
        recent = list(
            material.movements.order_by("-created_at", "-id")[:RECENT_MOVEMENT_LIMIT]
        )
        result.append((material, recent))
    return result


def list_movements(raw_material_id: Any) -> tuple[InventoryMovement, ...]:
    material = get_raw_material(raw_material_id)
    return tuple(material.movements.order_by("-created_at", "-id"))


def low_stock_queryset():
    return RawMaterial.objects.filter(is_active=True, current_stock__lt=F("min_stock"))


def list_low_stock() -> tuple[RawMaterial, ...]:
    return tuple(low_stock_queryset().order_by("name"))
