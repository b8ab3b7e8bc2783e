"""
ERP Stores Engine — Models
==========================
"""

from __future__ import annotations

import uuid

from django.db import models


class Area(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, unique=True)
    sales_captain = models.ForeignKey(
        "core_identity.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="areas",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "erp_areas"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Store(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    address = models.TextField(blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    state = models.CharField(max_length=120, blank=True, default="")
    pincode = models.CharField(max_length=12, blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    email = models.CharField(max_length=254, blank=True, default="")
    gst_number = models.CharField(max_length=32, blank=True, default="")
    contact_person = models.CharField(max_length=255, blank=True, default="")
    area = models.ForeignKey(
        Area,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stores",
    )
    # Default margin discount applied when invoicing this store's orders.
    margin_discount_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
    )
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        "core_identity.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_stores"
        ordering = ["name", "id"]
        indexes = [
            models.Index(fields=["area", "is_active"], name="idx_store_area_active"),
        ]

    def __str__(self) -> str:
        return self.name
