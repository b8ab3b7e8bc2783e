"""
ERP Procurement Engine — Request Contracts
==========================================
"""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from core.primitives import (
    MAX_COUNT,
    canonical_uuid,
    clean_optional_string,
    clean_string,
    quantize_money,
    quantize_quantity,
    to_decimal,
)

VENDOR_TEXT_FIELDS = ("gst_number", "address", "email")


def _billing_cycle_days(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError("billing_cycle_days must be an integer.")
    try:
        days = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("billing_cycle_days must be an integer.") from exc
    if days < 0:
        raise ValueError("billing_cycle_days must be >= 0.")
    if days > MAX_COUNT:
        raise ValueError(f"billing_cycle_days must be at most {MAX_COUNT}.")
    return days


def _optional_date(value: Any, *, field_name: str) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO date (YYYY-MM-DD).") from exc


@dataclass(frozen=True)
class VendorCreateRequest:
    name: str
    phone: str
    gst_number: str = ""
    address: str = ""
    email: str = ""
    billing_cycle_days: int = 0

    def __post_init__(self):
        object.__setattr__(self, "name", clean_string(self.name, field_name="name"))
        object.__setattr__(self, "phone", clean_string(self.phone, field_name="phone"))
        for field_name in VENDOR_TEXT_FIELDS:
            object.__setattr__(
                self, field_name, clean_optional_string(getattr(self, field_name))
            )
        object.__setattr__(
            self, "billing_cycle_days", _billing_cycle_days(self.billing_cycle_days)
        )


@dataclass(frozen=True)
class VendorUpdateRequest:
    vendor_id: uuid.UUID
    changes: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "vendor_id", canonical_uuid(self.vendor_id, field_name="vendor_id")
        )
        if not isinstance(self.changes, dict):
            raise ValueError("changes must be an object.")
        normalized: dict[str, Any] = {}
        for key, value in self.changes.items():
            if key in ("name", "phone"):
                normalized[key] = clean_string(value, field_name=key)
            elif key in VENDOR_TEXT_FIELDS:
                normalized[key] = clean_optional_string(value)
            elif key == "billing_cycle_days":
                normalized[key] = _billing_cycle_days(value)
            elif key == "is_active":
                if not isinstance(value, bool):
                    raise ValueError("is_active must be a boolean.")
                normalized[key] = value
        object.__setattr__(self, "changes", normalized)


@dataclass(frozen=True)
class PurchaseLineInput:
    raw_material_id: uuid.UUID
    quantity: Decimal
    price: Decimal

    def __post_init__(self):
        object.__setattr__(
            self,
            "raw_material_id",
            canonical_uuid(self.raw_material_id, field_name="raw_material_id"),
        )
        quantity = to_decimal(self.quantity, field_name="quantity")
        if quantity <= 0:
            raise ValueError("quantity must be greater than 0.")
        price = to_decimal(self.price, field_name="price")
        if price < 0:
            raise ValueError("price must be >= 0.")
        object.__setattr__(self, "quantity", quantize_quantity(quantity))
        object.__setattr__(self, "price", quantize_money(price))


@dataclass(frozen=True)
class PurchaseOrderCreateRequest:
    vendor_id: uuid.UUID
    items: tuple[PurchaseLineInput, ...]
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "vendor_id", canonical_uuid(self.vendor_id, field_name="vendor_id")
        )
        if not isinstance(self.items, tuple):
            raise ValueError("items must be a tuple.")
        if not self.items:
            raise ValueError("Purchase order must contain at least one item.")
        for item in self.items:
            if not isinstance(item, PurchaseLineInput):
                raise ValueError("items must contain PurchaseLineInput values.")
        object.__setattr__(self, "notes", clean_optional_string(self.notes))


@dataclass(frozen=True)
class VendorBillUpdateRequest:
    bill_id: uuid.UUID
    status: Optional[str] = None
    bill_number: Optional[str] = None
    bill_date: Optional[dt.date] = None

    def __post_init__(self):
        object.__setattr__(self, "bill_id", canonical_uuid(self.bill_id, field_name="bill_id"))
        if self.status is not None:
            object.__setattr__(self, "status", clean_string(self.status, field_name="status"))
        if self.bill_number is not None:
            object.__setattr__(self, "bill_number", clean_optional_string(self.bill_number))
        object.__setattr__(
            self, "bill_date", _optional_date(self.bill_date, field_name="bill_date")
        )
