"""
ERP Orders Engine — Request Contracts
=====================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from core.primitives import (
    MAX_COUNT,
    canonical_uuid,
    clean_optional_string,
    clean_string,
    to_optional_decimal,
)


def _positive_int(value: Any, *, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a positive integer.")
    try:
        result = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a positive integer.") from exc
    if result <= 0:
        raise ValueError(f"{field_name} must be a positive integer.")
    if result > MAX_COUNT:
        raise ValueError(f"{field_name} must be at most {MAX_COUNT}.")
    return result


def _optional_non_negative_int(value: Any, *, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a non-negative integer.")
    try:
        result = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a non-negative integer.") from exc
    if result < 0:
        raise ValueError(f"{field_name} must be a non-negative integer.")
    if result > MAX_COUNT:
        raise ValueError(f"{field_name} must be at most {MAX_COUNT}.")
    return result


@dataclass(frozen=True)
class OrderLineInput:
    product_id: uuid.UUID
    quantity: int
    price: Optional[Decimal] = None
    available_quantity: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(
            self, "product_id", canonical_uuid(self.product_id, field_name="product_id")
        )
        object.__setattr__(
            self, "quantity", _positive_int(self.quantity, field_name="quantity")
        )
        price = to_optional_decimal(self.price, field_name="price")
        if price is not None and price < 0:
            raise ValueError("price must be >= 0.")
        object.__setattr__(self, "price", price)
        object.__setattr__(
            self,
            "available_quantity",
            _optional_non_negative_int(
                self.available_quantity, field_name="available_quantity"
            ),
        )


@dataclass(frozen=True)
class OrderCreateRequest:
    store_id: uuid.UUID
    items: tuple[OrderLineInput, ...]
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "store_id", canonical_uuid(self.store_id, field_name="store_id")
        )
        if not isinstance(self.items, tuple):
            raise ValueError("items must be a tuple.")
        if not self.items:
            raise ValueError("Order must contain at least one item.")
        for item in self.items:
            if not isinstance(item, OrderLineInput):
                raise ValueError("items must contain OrderLineInput values.")
        object.__setattr__(self, "notes", clean_optional_string(self.notes))


@dataclass(frozen=True)
class OrderUpdateRequest:
    order_id: uuid.UUID
    status: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(
            self, "order_id", canonical_uuid(self.order_id, field_name="order_id")
        )
        if self.status is not None:
            object.__setattr__(
                self, "status", clean_string(self.status, field_name="status").lower()
            )
        if self.notes is not None:
            object.__setattr__(self, "notes", clean_optional_string(self.notes))
        if self.status is None and self.notes is None:
            raise ValueError("Provide status or notes to update.")
