"""
ERP Stores Engine — Request Contracts
=====================================
Frozen request objects. __post_init__ normalizes raw JSON values and
raises ValueError on invalid input.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from core.primitives import (
    canonical_optional_uuid,
    canonical_uuid,
    clean_optional_string,
    clean_string,
    percent,
)

STORE_TEXT_FIELDS = (
    "address",
    "city",
    "state",
    "pincode",
    "phone",
    "email",
    "gst_number",
    "contact_person",
)


def _optional_percent(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return percent(value, field_name="margin_discount_percent")


@dataclass(frozen=True)
class AreaCreateRequest:
    name: str
    sales_captain_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        object.__setattr__(self, "name", clean_string(self.name, field_name="name"))
        object.__setattr__(
            self,
            "sales_captain_id",
            canonical_optional_uuid(self.sales_captain_id, field_name="sales_captain_id"),
        )


@dataclass(frozen=True)
class StoreCreateRequest:
    name: str
    address: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    phone: str = ""
    email: str = ""
    gst_number: str = ""
    contact_person: str = ""
    area_id: Optional[uuid.UUID] = None
    margin_discount_percent: Optional[Decimal] = None

    def __post_init__(self):
        object.__setattr__(self, "name", clean_string(self.name, field_name="name"))
        for field_name in STORE_TEXT_FIELDS:
            object.__setattr__(
                self, field_name, clean_optional_string(getattr(self, field_name))
            )
        object.__setattr__(
            self,
            "area_id",
            canonical_optional_uuid(self.area_id, field_name="area_id"),
        )
        object.__setattr__(
            self,
            "margin_discount_percent",
            _optional_percent(self.margin_discount_percent),
        )


@dataclass(frozen=True)
class StoreUpdateRequest:
    store_id: uuid.UUID
    changes: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "store_id", canonical_uuid(self.store_id, field_name="store_id")
        )
        if not isinstance(self.changes, dict):
            raise ValueError("changes must be an object.")
        normalized: dict[str, Any] = {}
        for key, value in self.changes.items():
            if key == "name":
                normalized[key] = clean_string(value, field_name="name")
            elif key in STORE_TEXT_FIELDS:
                normalized[key] = clean_optional_string(value)
            elif key == "area_id":
                normalized[key] = canonical_optional_uuid(value, field_name="area_id")
            elif key == "margin_discount_percent":
                normalized[key] = _optional_percent(value)
            elif key == "is_active":
                if not isinstance(value, bool):
                    raise ValueError("is_active must be a boolean.")
                normalized[key] = value
        object.__setattr__(self, "changes", normalized)
