"""
ERP Inventory Engine — Policies
===============================
Stock arithmetic for one movement.

    in          stock + quantity
    out         stock - quantity, rejected when quantity > stock
    adjustment  quantity (absolute count)
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from core.errors import ReasonCode, RejectionReason
from core.primitives import quantize_quantity, quantity_str
from engines.inventory.models import MovementType


def negative_stock_policy(
    *,
    movement_type: str,
    current_stock: Decimal,
    quantity: Decimal,
    material_name: str,
) -> Optional[RejectionReason]:
    """Reject an issue that would take stock below zero."""
    if movement_type == MovementType.OUT and quantity > current_stock:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_STOCK,
            message=(
                f"Insufficient stock: {quantity_str(current_stock)} available, "
                f"{quantity_str(quantity)} requested for {material_name}."
            ),
            policy_name="negative_stock_policy",
        )
    return None


def stock_after_movement(
    *,
    movement_type: str,
    current_stock: Decimal,
    quantity: Decimal,
) -> Decimal:
    if movement_type == MovementType.IN:
        return quantize_quantity(current_stock + quantity)
    if movement_type == MovementType.OUT:
        return quantize_quantity(current_stock - quantity)
    if movement_type == MovementType.ADJUSTMENT:
        return quantize_quantity(quantity)
    raise ValueError(f"Unknown movement type '{movement_type}'.")
