"""
Tests for core.documents.numbering — period-resetting document numbers.
"""

from datetime import datetime, timezone

import pytest

from core.documents.models import DocumentSequence
from core.documents.numbering import (
    DOC_INVOICE,
    DOC_ORDER,
    DOC_PAYMENT,
    DOC_PURCHASE_ORDER,
    RESET_NEVER,
    DbNumberingProvider,
    InMemoryNumberingProvider,
    NumberingPolicy,
    financial_year_label,
    issue_document_number,
)


def _at(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestFormats:
    def test_default_formats(self):
        provider = InMemoryNumberingProvider()
        now = _at(2026, 10, 19, 10)
        assert issue_document_number(provider, DOC_ORDER, now) == "ORD2610190001"
        assert issue_document_number(provider, DOC_INVOICE, now) == "2026-27/1"
        assert issue_document_number(provider, DOC_PAYMENT, now) == "PAY2610190001"
        assert issue_document_number(provider, DOC_PURCHASE_ORDER, now) == "PO-261019-001"

    def test_financial_year_boundary(self):
        assert financial_year_label(_at(2026, 3, 31, 23)) == "2025-26"
        assert financial_year_label(_at(2026, 4, 1, 0)) == "2026-27"

    def test_unknown_doc_type(self):
        with pytest.raises(LookupError):
            issue_document_number(InMemoryNumberingProvider(), "CREDIT_NOTE", _at(2026, 1, 1))

    def test_include_period_needs_reset(self):
        with pytest.raises(ValueError):
            NumberingPolicy(doc_type="X", reset_period=RESET_NEVER, include_period=True)


class TestSequences:
    def test_daily_reset(self):
        provider = InMemoryNumberingProvider()
        assert issue_document_number(provider, DOC_ORDER, _at(2026, 10, 19, 9)) == "ORD2610190001"
        assert issue_document_number(provider, DOC_ORDER, _at(2026, 10, 19, 18)) == "ORD2610190002"
        assert issue_document_number(provider, DOC_ORDER, _at(2026, 10, 20, 8)) == "ORD2610200001"

    def test_invoice_sequence_resets_on_first_april(self):
        provider = InMemoryNumberingProvider()
        issue_document_number(provider, DOC_INVOICE, _at(2026, 3, 30))
        assert issue_document_number(provider, DOC_INVOICE, _at(2026, 3, 31)) == "2025-26/2"
        assert issue_document_number(provider, DOC_INVOICE, _at(2026, 4, 1)) == "2026-27/1"


@pytest.mark.django_db(transaction=True)
class TestDbNumberingProvider:
    def test_persists_sequence_between_instances(self):
        now = _at(2026, 10, 19, 9)
        assert issue_document_number(DbNumberingProvider(), DOC_ORDER, now) == "ORD2610190001"
        assert issue_document_number(DbNumberingProvider(), DOC_ORDER, now) == "ORD2610190002"
        row = DocumentSequence.objects.get(doc_type=DOC_ORDER)
        assert row.period_key == "2026-10-19"
        assert row.next_sequence == 3
