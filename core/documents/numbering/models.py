"""
ERP Documents - Numbering Policy
================================
Declares how one document type is numbered.

Doctrine:
- Same policy + period + sequence position → same document number.
- No random() or current time inside number generation logic.
- The reset period is resolved from an explicit datetime argument.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Reset period identifiers
# ---------------------------------------------------------------------------

RESET_NEVER = "NEVER"                    # Sequence never resets
RESET_DAILY = "DAILY"                    # Resets each calendar day
RESET_MONTHLY = "MONTHLY"                # Resets each calendar month
RESET_YEARLY = "YEARLY"                  # Resets each calendar year
RESET_FINANCIAL_YEAR = "FINANCIAL_YEAR"  # Resets each 1 April

VALID_RESET_PERIODS = frozenset(
    {RESET_NEVER, RESET_DAILY, RESET_MONTHLY, RESET_YEARLY, RESET_FINANCIAL_YEAR}
)

FINANCIAL_YEAR_START_MONTH = 4

# ---------------------------------------------------------------------------
# Document types
# ---------------------------------------------------------------------------

DOC_ORDER = "ORDER"
DOC_INVOICE = "INVOICE"
DOC_PAYMENT = "PAYMENT"
DOC_PURCHASE_ORDER = "PURCHASE_ORDER"


@dataclass(frozen=True)
class NumberingPolicy:
    """
    Fields:
        doc_type: e.g. "ORDER", "INVOICE"
        prefix: prepended before everything else (e.g. "ORD", "PO-")
        suffix: appended after the sequence
        padding: minimum digit width for the sequence (4 → "0001")
        reset_period: when the counter restarts
        include_period: embed the period label (e.g. "261019", "2025-26")
        separator: placed between period label and sequence
        start_at: first sequence number of each period
    """
    doc_type: str
    prefix: str = ""
    suffix: str = ""
    padding: int = 4
    reset_period: str = RESET_NEVER
    include_period: bool = False
    separator: str = ""
    start_at: int = 1

    def __post_init__(self):
        if not self.doc_type or not isinstance(self.doc_type, str):
            raise ValueError("doc_type must be a non-empty string.")
        if not isinstance(self.prefix, str):
            raise ValueError("prefix must be a string.")
        if not isinstance(self.suffix, str):
            raise ValueError("suffix must be a string.")
        if not isinstance(self.separator, str):
            raise ValueError("separator must be a string.")
        if not isinstance(self.padding, int) or self.padding < 1:
            raise ValueError("padding must be int >= 1.")
        if self.reset_period not in VALID_RESET_PERIODS:
            raise ValueError(
                f"reset_period '{self.reset_period}' is not valid. "
                f"Must be one of: {sorted(VALID_RESET_PERIODS)}"
            )
        if self.include_period and self.reset_period == RESET_NEVER:
            raise ValueError("include_period requires a resetting period.")
        if not isinstance(self.start_at, int) or self.start_at < 1:
            raise ValueError("start_at must be int >= 1.")

    def format_number(self, sequence: int, period_label: str = "") -> str:
        """
        Format a document number from a sequence position.

        Returns e.g. "ORD2610190001", "2025-26/14", "PO-261019-003".
        """
        if not isinstance(sequence, int) or sequence < 1:
            raise ValueError("sequence must be int >= 1.")
        padded = str(sequence).zfill(self.padding)
        if self.include_period and period_label:
            return f"{self.prefix}{period_label}{self.separator}{padded}{self.suffix}"
        return f"{self.prefix}{padded}{self.suffix}"


DEFAULT_POLICIES: tuple[NumberingPolicy, ...] = (
    NumberingPolicy(
        doc_type=DOC_ORDER,
        prefix="ORD",
        padding=4,
        reset_period=RESET_DAILY,
        include_period=True,
    ),
    NumberingPolicy(
        doc_type=DOC_INVOICE,
        padding=1,
        reset_period=RESET_FINANCIAL_YEAR,
        include_period=True,
        separator="/",
    ),
    NumberingPolicy(
        doc_type=DOC_PAYMENT,
        prefix="PAY",
        padding=4,
        reset_period=RESET_DAILY,
        include_period=True,
    ),
    NumberingPolicy(
        doc_type=DOC_PURCHASE_ORDER,
        prefix="PO-",
        padding=3,
        reset_period=RESET_DAILY,
        include_period=True,
        separator="-",
    ),
)
