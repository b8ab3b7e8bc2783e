"""
ERP Production Engine — Request Contracts
=========================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from core.primitives import MAX_COUNT, canonical_uuid, clean_optional_string, clean_string
from engines.production.models import ProductionStatus


def _positive_int(value, *, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a positive integer.")
    try:
        result = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a positive integer.") from exc
    if result <= 0:
        raise ValueError(f"{field_name} must be a positive integer.")
    if result > MAX_COUNT:
        raise ValueError(f"{field_name} must be at most {MAX_COUNT}.")
    return result


@dataclass(frozen=True)
class ProductionCreateRequest:
    product_name: str
    quantity: int
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "product_name", clean_string(self.product_name, field_name="product_name")
        )
        object.__setattr__(self, "quantity", _positive_int(self.quantity, field_name="quantity"))
        object.__setattr__(self, "notes", clean_optional_string(self.notes))


@dataclass(frozen=True)
class ProductionUpdateRequest:
    production_id: uuid.UUID
    status: str
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(
            self,
            "production_id",
            canonical_uuid(self.production_id, field_name="production_id"),
        )
        status = clean_string(self.status, field_name="status")
        if status not in ProductionStatus.values:
            raise ValueError(
                f"status must be one of: {', '.join(ProductionStatus.values)}."
            )
        object.__setattr__(self, "status", status)
        if self.notes is not None:
            object.__setattr__(self, "notes", clean_optional_string(self.notes))
