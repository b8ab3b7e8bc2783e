"""
ERP Documents - Numbering Public API
====================================
"""

from core.documents.numbering.engine import (
    SequenceState,
    financial_year_label,
    generate_document_number,
    period_key,
    period_label,
)
from core.documents.numbering.models import (
    DEFAULT_POLICIES,
    DOC_INVOICE,
    DOC_ORDER,
    DOC_PAYMENT,
    DOC_PURCHASE_ORDER,
    RESET_DAILY,
    RESET_FINANCIAL_YEAR,
    RESET_MONTHLY,
    RESET_NEVER,
    RESET_YEARLY,
    VALID_RESET_PERIODS,
    NumberingPolicy,
)
from core.documents.numbering.provider import (
    DbNumberingProvider,
    InMemoryNumberingProvider,
    NumberingProvider,
    issue_document_number,
)

__all__ = [
    "DEFAULT_POLICIES",
    "DOC_INVOICE",
    "DOC_ORDER",
    "DOC_PAYMENT",
    "DOC_PURCHASE_ORDER",
    "DbNumberingProvider",
    "InMemoryNumberingProvider",
    "NumberingPolicy",
    "NumberingProvider",
    "RESET_DAILY",
    "RESET_FINANCIAL_YEAR",
    "RESET_MONTHLY",
    "RESET_NEVER",
    "RESET_YEARLY",
    "SequenceState",
    "VALID_RESET_PERIODS",
    "financial_year_label",
    "generate_document_number",
    "issue_document_number",
    "period_key",
    "period_label",
]
