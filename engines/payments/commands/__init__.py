"""
ERP Payments Engine — Request Contracts
=======================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

from core.primitives import canonical_uuid, clean_optional_string, to_decimal
from engines.payments.models import PaymentMode


@dataclass(frozen=True)
class PaymentRecordRequest:
    invoice_id: uuid.UUID
    amount: Decimal
    payment_mode: str = PaymentMode.CASH
    reference: str = ""
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "invoice_id", canonical_uuid(self.invoice_id, field_name="invoice_id")
        )
        if self.amount is None or self.amount == "":
            raise ValueError("amount is required.")
        object.__setattr__(self, "amount", to_decimal(self.amount, field_name="amount"))

        mode = clean_optional_string(self.payment_mode, default=PaymentMode.CASH)
        if mode not in PaymentMode.values:
            raise ValueError(
                f"payment_mode must be one of: {', '.join(PaymentMode.values)}."
            )
        object.__setattr__(self, "payment_mode", mode)
        object.__setattr__(self, "reference", clean_optional_string(self.reference))
        object.__setattr__(self, "notes", clean_optional_string(self.notes))
