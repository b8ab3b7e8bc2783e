"""
ERP Catalog Engine — Request Contracts
======================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from core.primitives import (
    canonical_uuid,
    clean_optional_string,
    clean_string,
    percent,
    to_decimal,
    to_optional_decimal,
)
from engines.catalog.models import DEFAULT_GST_PERCENT


def _non_negative(value: Any, *, field_name: str) -> Decimal:
    result = to_decimal(value, field_name=field_name)
    if result < 0:
        raise ValueError(f"{field_name} must be >= 0.")
    return result


def _optional_sku(value: Any) -> Optional[str]:
    cleaned = clean_optional_string(value)
    return cleaned or None


@dataclass(frozen=True)
class ProductCreateRequest:
    name: str
    mrp: Decimal
    sku: Optional[str] = None
    weight: Optional[Decimal] = None
    weight_unit: str = "g"
    gst_percent: Decimal = DEFAULT_GST_PERCENT
    hsn_code: str = ""

    def __post_init__(self):
        object.__setattr__(self, "name", clean_string(self.name, field_name="name"))
        object.__setattr__(self, "mrp", _non_negative(self.mrp, field_name="mrp"))
        object.__setattr__(self, "sku", _optional_sku(self.sku))
        object.__setattr__(
            self, "weight", to_optional_decimal(self.weight, field_name="weight")
        )
        object.__setattr__(
            self, "weight_unit", clean_optional_string(self.weight_unit, default="g")
        )
        gst = DEFAULT_GST_PERCENT if self.gst_percent is None else self.gst_percent
        object.__setattr__(self, "gst_percent", percent(gst, field_name="gst_percent"))
        object.__setattr__(self, "hsn_code", clean_optional_string(self.hsn_code))


@dataclass(frozen=True)
class ProductUpdateRequest:
    product_id: uuid.UUID
    changes: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "product_id", canonical_uuid(self.product_id, field_name="product_id")
        )
        if not isinstance(self.changes, dict):
            raise ValueError("changes must be an object.")
        normalized: dict[str, Any] = {}
        for key, value in self.changes.items():
            if key == "name":
                normalized[key] = clean_string(value, field_name="name")
            elif key == "mrp":
                normalized[key] = _non_negative(value, field_name="mrp")
            elif key == "sku":
                normalized[key] = _optional_sku(value)
            elif key == "weight":
                normalized[key] = to_optional_decimal(value, field_name="weight")
            elif key == "weight_unit":
                normalized[key] = clean_optional_string(value, default="g")
            elif key == "gst_percent":
                normalized[key] = percent(value, field_name="gst_percent")
            elif key == "hsn_code":
                normalized[key] = clean_optional_string(value)
            elif key == "is_active":
                if not isinstance(value, bool):
                    raise ValueError("is_active must be a boolean.")
                normalized[key] = value
        object.__setattr__(self, "changes", normalized)
