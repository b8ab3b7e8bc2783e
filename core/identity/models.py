"""
ERP Identity - Users
====================
"""

from __future__ import annotations

import uuid

from django.db import models


class UserRole(models.TextChoices):
    ADMIN = "admin", "Admin"
    SALES_CAPTAIN = "sales_captain", "Sales captain"


class User(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=254, unique=True)
    password = models.CharField(max_length=128)
    name = models.CharField(max_length=255)
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.SALES_CAPTAIN,
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_users"
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
