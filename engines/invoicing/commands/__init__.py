"""
ERP Invoicing Engine — Request Contracts
========================================
"""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from core.primitives import canonical_uuid, clean_optional_string, percent


def _optional_date(value: Any) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise ValueError("due_date must be an ISO date (YYYY-MM-DD).") from exc


@dataclass(frozen=True)
class InvoiceGenerateRequest:
    """
    discount_percent overrides the store's margin for every line;
    product_discounts overrides it per product.
    """

    order_id: uuid.UUID
    discount_percent: Optional[Decimal] = None
    product_discounts: dict[uuid.UUID, Decimal] = field(default_factory=dict)
    update_store_margin: bool = False
    due_date: Optional[dt.date] = None
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "order_id", canonical_uuid(self.order_id, field_name="order_id")
        )
        if self.discount_percent is not None and self.discount_percent != "":
            object.__setattr__(
                self,
                "discount_percent",
                percent(self.discount_percent, field_name="discount_percent"),
            )
        else:
            object.__setattr__(self, "discount_percent", None)

        if not isinstance(self.product_discounts, dict):
            raise ValueError("product_discounts must be an object of product_id → percent.")
        object.__setattr__(
            self,
            "product_discounts",
            {
                canonical_uuid(product_id, field_name="product_discounts key"): percent(
                    value, field_name=f"product_discounts[{product_id}]"
                )
                for product_id, value in self.product_discounts.items()
            },
        )
        if not isinstance(self.update_store_margin, bool):
            raise ValueError("update_store_margin must be a boolean.")
        if self.update_store_margin and self.discount_percent is None:
            raise ValueError("update_store_margin requires discount_percent.")
        object.__setattr__(self, "due_date", _optional_date(self.due_date))
        object.__setattr__(self, "notes", clean_optional_string(self.notes))
