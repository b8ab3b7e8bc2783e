"""
ERP Inventory Engine — Request Contracts
========================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

from core.primitives import (
    canonical_uuid,
    clean_optional_string,
    clean_string,
    quantize_quantity,
    to_decimal,
    to_optional_decimal,
)
from engines.inventory.models import MovementType


def _non_negative_quantity(value, *, field_name: str) -> Decimal:
    result = to_optional_decimal(value, field_name=field_name)
    if result is None:
        return quantize_quantity(Decimal("0"))
    if result < 0:
        raise ValueError(f"{field_name} must be >= 0.")
    return quantize_quantity(result)


@dataclass(frozen=True)
class RawMaterialCreateRequest:
    name: str
    unit: str = "kg"
    current_stock: Decimal = Decimal("0")
    min_stock: Decimal = Decimal("0")

    def __post_init__(self):
        object.__setattr__(self, "name", clean_string(self.name, field_name="name"))
        object.__setattr__(self, "unit", clean_optional_string(self.unit, default="kg"))
        object.__setattr__(
            self,
            "current_stock",
            _non_negative_quantity(self.current_stock, field_name="current_stock"),
        )
        object.__setattr__(
            self,
            "min_stock",
            _non_negative_quantity(self.min_stock, field_name="min_stock"),
        )


@dataclass(frozen=True)
class StockMovementRequest:
    raw_material_id: uuid.UUID
    movement_type: str
    quantity: Decimal
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(
            self,
            "raw_material_id",
            canonical_uuid(self.raw_material_id, field_name="raw_material_id"),
        )
        if self.movement_type not in MovementType.values:
            raise ValueError(
                f"type must be one of: {', '.join(MovementType.values)}."
            )
        if self.quantity is None or self.quantity == "":
            raise ValueError("quantity is required.")
        quantity = to_decimal(self.quantity, field_name="quantity")
        if self.movement_type == MovementType.ADJUSTMENT:
            if quantity < 0:
                raise ValueError("quantity must be >= 0 for an adjustment.")
        elif quantity <= 0:
            raise ValueError("quantity must be greater than 0.")
        object.__setattr__(self, "quantity", quantize_quantity(quantity))
        object.__setattr__(self, "notes", clean_optional_string(self.notes))
