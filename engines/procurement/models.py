"""
ERP Procurement Engine — Models
===============================
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models

_ZERO = Decimal("0.00")


class Vendor(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=32)
    gst_number = models.CharField(max_length=32, blank=True, default="")
    address = models.TextField(blank=True, default="")
    email = models.CharField(max_length=254, blank=True, default="")
    billing_cycle_days = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_vendors"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class PurchaseOrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    REACHED_OFFICE = "reached_office", "Reached office"


class PurchaseOrder(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=32, unique=True)
    vendor = models.ForeignKey(
        Vendor,
        on_delete=models.PROTECT,
        related_name="purchase_orders",
    )
    status = models.CharField(
        max_length=20,
        choices=PurchaseOrderStatus.choices,
        default=PurchaseOrderStatus.PENDING,
    )
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=_ZERO)
    notes = models.TextField(blank=True, default="")
    created_by = models.ForeignKey(
        "core_identity.User",
        on_delete=models.PROTECT,
        related_name="+",
    )
    reached_office_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_purchase_orders"
        ordering = ["-created_at", "id"]

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class PurchaseOrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    purchase_order = models.ForeignKey(
        PurchaseOrder,
        on_delete=models.CASCADE,
        related_name="items",
    )
    raw_material = models.ForeignKey(
        "inventory.RawMaterial",
        on_delete=models.PROTECT,
        related_name="+",
    )
    quantity = models.DecimalField(max_digits=14, decimal_places=3)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        db_table = "erp_purchase_order_items"
        ordering = ["purchase_order", "id"]


class VendorBillStatus(models.TextChoices):
    PENDING_DISPATCH = "pending_dispatch", "Pending dispatch"
    SENT_TO_VENDOR = "sent_to_vendor", "Sent to vendor"
    PAID = "paid", "Paid"


class VendorBill(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vendor = models.ForeignKey(
        Vendor,
        on_delete=models.PROTECT,
        related_name="bills",
    )
    purchase_order = models.OneToOneField(
        PurchaseOrder,
        on_delete=models.CASCADE,
        related_name="vendor_bill",
    )
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=VendorBillStatus.choices,
        default=VendorBillStatus.PENDING_DISPATCH,
    )
    bill_number = models.CharField(max_length=64, blank=True, default="")
    bill_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_vendor_bills"
        ordering = ["-created_at", "id"]

    def __str__(self) -> str:
        return f"{self.purchase_order_id} {self.amount} ({self.status})"
