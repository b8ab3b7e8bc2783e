"""
ERP Payments Engine — Models
============================
"""

from __future__ import annotations

import uuid

from django.db import models


class PaymentMode(models.TextChoices):
    CASH = "cash", "Cash"
    UPI = "upi", "UPI"
    BANK_TRANSFER = "bank_transfer", "Bank transfer"
    CHEQUE = "cheque", "Cheque"


class Payment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    payment_number = models.CharField(max_length=32, unique=True)
    invoice = models.ForeignKey(
        "invoicing.Invoice",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    collected_by = models.ForeignKey(
        "core_identity.User",
        on_delete=models.PROTECT,
        related_name="collected_payments",
    )
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_mode = models.CharField(
        max_length=20,
        choices=PaymentMode.choices,
        default=PaymentMode.CASH,
    )
    reference = models.CharField(max_length=120, blank=True, default="")
    notes = models.TextField(blank=True, default="")
    paid_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "erp_payments"
        ordering = ["-paid_at", "id"]
        indexes = [
            models.Index(fields=["invoice", "paid_at"], name="idx_payment_invoice_paid"),
            models.Index(fields=["collected_by", "paid_at"], name="idx_payment_collector_paid"),
        ]

    def __str__(self) -> str:
        return f"{self.payment_number} {self.amount}"
