"""
ERP Documents - Sequence State
==============================
One row per document type. Rows are locked with SELECT ... FOR UPDATE
while a number is issued.
"""

from __future__ import annotations

from django.db import models


class DocumentSequence(models.Model):
    doc_type = models.CharField(max_length=32, primary_key=True)
    period_key = models.CharField(max_length=32, default="", blank=True)
    next_sequence = models.PositiveIntegerField(default=1)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "erp_document_sequences"
        ordering = ["doc_type"]

    def __str__(self) -> str:
        return f"{self.doc_type} [{self.period_key}] next={self.next_sequence}"
