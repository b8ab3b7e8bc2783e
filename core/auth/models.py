"""
ERP Auth - Session Tokens
=========================
Only the SHA-256 hash of a token is stored. The raw token is returned
once, at login.
"""

from __future__ import annotations

import uuid

from django.db import models


class SessionStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    REVOKED = "revoked", "Revoked"


class SessionToken(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    token_hash = models.CharField(
        max_length=64,
        unique=True,
        db_index=True,
    )
    user = models.ForeignKey(
        "core_identity.User",
        on_delete=models.CASCADE,
        related_name="sessions",
    )
    status = models.CharField(
        max_length=20,
        choices=SessionStatus.choices,
        default=SessionStatus.ACTIVE,
    )
    created_at = models.DateTimeField()
    expires_at = models.DateTimeField()
    revoked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "erp_session_tokens"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["status", "expires_at"], name="idx_session_status_expiry"),
        ]

    def __str__(self) -> str:
        return f"{self.id} ({self.status})"
