"""
ERP Inventory Engine — Models
=============================
RawMaterial.current_stock changes only through apply_movement(), which
writes an InventoryMovement row with stock_before/stock_after first.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models

_ZERO_QTY = Decimal("0.000")


class MovementType(models.TextChoices):
    IN = "in", "Stock in"
    OUT = "out", "Stock out"
    ADJUSTMENT = "adjustment", "Adjustment"


class RawMaterial(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=160, unique=True)
    unit = models.CharField(max_length=20, default="kg")
    current_stock = models.DecimalField(max_digits=14, decimal_places=3, default=_ZERO_QTY)
    min_stock = models.DecimalField(max_digits=14, decimal_places=3, default=_ZERO_QTY)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_raw_materials"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.current_stock} {self.unit})"

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock < self.min_stock


class InventoryMovement(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    raw_material = models.ForeignKey(
        RawMaterial,
        on_delete=models.CASCADE,
        related_name="movements",
    )
    movement_type = models.CharField(max_length=20, choices=MovementType.choices)
    quantity = models.DecimalField(max_digits=14, decimal_places=3)
    stock_before = models.DecimalField(max_digits=14, decimal_places=3)
    stock_after = models.DecimalField(max_digits=14, decimal_places=3)
    notes = models.TextField(blank=True, default="")
    created_by = models.ForeignKey(
        "core_identity.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField()

    class Meta:
        db_table = "erp_inventory_movements"
        ordering = ["-created_at", "id"]
        indexes = [
            models.Index(
                fields=["raw_material", "created_at"],
                name="idx_movement_material_time",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.raw_material_id} {self.movement_type} {self.quantity}"
