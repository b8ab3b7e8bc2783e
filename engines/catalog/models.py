"""
ERP Catalog Engine — Models
===========================
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models

DEFAULT_GST_PERCENT = Decimal("18.00")


class Product(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=64, unique=True, null=True, blank=True)
    weight = models.DecimalField(max_digits=10, decimal_places=3, null=True, blank=True)
    weight_unit = models.CharField(max_length=16, default="g")
    mrp = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    gst_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=DEFAULT_GST_PERCENT,
    )
    hsn_code = models.CharField(max_length=16, blank=True, default="")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_products"
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return self.name
