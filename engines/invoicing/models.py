"""
ERP Invoicing Engine — Models
=============================
Invariant maintained by the invoicing and payments services:

    total_amount   == subtotal - discount_amount + gst_amount
    balance_amount == total_amount - paid_amount
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models

_ZERO = Decimal("0.00")


class InvoiceStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    UNPAID = "unpaid", "Unpaid"
    PARTIAL = "partial", "Partially paid"
    PAID = "paid", "Paid"


class Invoice(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice_number = models.CharField(max_length=32, unique=True)
    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="invoice",
    )
    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.PROTECT,
        related_name="invoices",
    )
    created_by = models.ForeignKey(
        "core_identity.User",
        on_delete=models.PROTECT,
        related_name="+",
    )
    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    discount_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
    )
    discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    gst_amount = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    paid_amount = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    balance_amount = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    status = models.CharField(
        max_length=20,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.DRAFT,
    )
    due_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True, default="")
    issued_at = models.DateTimeField()
    approved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_invoices"
        ordering = ["-issued_at", "id"]
        indexes = [
            models.Index(fields=["status", "issued_at"], name="idx_invoice_status_issued"),
            models.Index(fields=["store", "issued_at"], name="idx_invoice_store_issued"),
        ]

    def __str__(self) -> str:
        return f"{self.invoice_number} ({self.status})"


class InvoiceItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="+",
    )
    quantity = models.PositiveIntegerField()
    list_price = models.DecimalField(max_digits=12, decimal_places=2)
    # Unit price after the margin discount.
    price = models.DecimalField(max_digits=12, decimal_places=2)
    discount_percent = models.DecimalField(max_digits=5, decimal_places=2, default=_ZERO)
    discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    gst_percent = models.DecimalField(max_digits=5, decimal_places=2)
    gst_amount = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    total = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        db_table = "erp_invoice_items"
        ordering = ["invoice", "id"]

    def __str__(self) -> str:
        return f"{self.invoice_id}:{self.product_id} x{self.quantity}"
