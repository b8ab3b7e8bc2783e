"""
ERP Production Engine — Models
==============================
"""

from __future__ import annotations

import uuid

from django.db import models


class ProductionStatus(models.TextChoices):
    SUGGESTED = "suggested", "Suggested"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"


class Production(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField()
    status = models.CharField(
        max_length=20,
        choices=ProductionStatus.choices,
        default=ProductionStatus.SUGGESTED,
    )
    notes = models.TextField(blank=True, default="")
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
        db_table = "erp_production"
        ordering = ["-created_at", "id"]

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity} ({self.status})"
