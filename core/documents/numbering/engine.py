"""
ERP Documents - Numbering Engine
================================
Deterministic document number generation from a NumberingPolicy + sequence state.

Doctrine:
- Stateless engine: given the same inputs, always produces the same output.
- Sequence state is managed externally (provider).
- Time is passed explicitly, never read from the system clock here.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.documents.numbering.models import (
    FINANCIAL_YEAR_START_MONTH,
    RESET_DAILY,
    RESET_FINANCIAL_YEAR,
    RESET_MONTHLY,
    RESET_NEVER,
    RESET_YEARLY,
    NumberingPolicy,
)


# ---------------------------------------------------------------------------
# Period helpers
# ---------------------------------------------------------------------------

def _as_utc(issued_at: datetime) -> datetime:
    if not isinstance(issued_at, datetime):
        raise ValueError("issued_at must be datetime.")
    if issued_at.tzinfo is None:
        return issued_at.replace(tzinfo=timezone.utc)
    return issued_at.astimezone(timezone.utc)


def financial_year_start(issued_at: datetime) -> int:
    """Calendar year in which the financial year containing issued_at began."""
    issued_at = _as_utc(issued_at)
    if issued_at.month >= FINANCIAL_YEAR_START_MONTH:
        return issued_at.year
    return issued_at.year - 1


def financial_year_label(issued_at: datetime) -> str:
    """
    April 2025 .. March 2026 → "2025-26".
    """
    start = financial_year_start(issued_at)
    return f"{start}-{(start + 1) % 100:02d}"


def period_key(policy: NumberingPolicy, issued_at: datetime) -> str:
    """
    Return a string key identifying the current reset period for issued_at.

    - NEVER          → "" (constant)
    - DAILY          → "2026-10-19"
    - MONTHLY        → "2026-10"
    - YEARLY         → "2026"
    - FINANCIAL_YEAR → "FY2026"
    """
    if policy.reset_period == RESET_NEVER:
        return ""
    issued_at = _as_utc(issued_at)

    if policy.reset_period == RESET_DAILY:
        return issued_at.strftime("%Y-%m-%d")
    if policy.reset_period == RESET_MONTHLY:
        return issued_at.strftime("%Y-%m")
    if policy.reset_period == RESET_YEARLY:
        return issued_at.strftime("%Y")
    if policy.reset_period == RESET_FINANCIAL_YEAR:
        return f"FY{financial_year_start(issued_at)}"
    return ""


def period_label(policy: NumberingPolicy, issued_at: datetime) -> str:
    """
    Human-facing period fragment embedded in document numbers.

    - DAILY          → "261019"
    - MONTHLY        → "2610"
    - YEARLY         → "2026"
    - FINANCIAL_YEAR → "2026-27"
    """
    if policy.reset_period == RESET_NEVER:
        return ""
    issued_at = _as_utc(issued_at)

    if policy.reset_period == RESET_DAILY:
        return issued_at.strftime("%y%m%d")
    if policy.reset_period == RESET_MONTHLY:
        return issued_at.strftime("%y%m")
    if policy.reset_period == RESET_YEARLY:
        return issued_at.strftime("%Y")
    if policy.reset_period == RESET_FINANCIAL_YEAR:
        return financial_year_label(issued_at)
    return ""


# ---------------------------------------------------------------------------
# Sequence state
# ---------------------------------------------------------------------------

class SequenceState:
    """
    Tracks the current sequence counter for one policy.

    - current_period_key: the period key when the counter was last updated
    - current_sequence: the next sequence number to issue
    """

    def __init__(
        self,
        policy: NumberingPolicy,
        *,
        current_period_key: str = "",
        current_sequence: int | None = None,
    ):
        self._policy = policy
        self._current_period_key = current_period_key
        self._current_sequence = (
            current_sequence if current_sequence is not None else policy.start_at
        )

    @property
    def policy(self) -> NumberingPolicy:
        return self._policy

    @property
    def current_sequence(self) -> int:
        return self._current_sequence

    @property
    def current_period_key(self) -> str:
        return self._current_period_key

    def next_number(self, issued_at: datetime) -> tuple[str, "SequenceState"]:
        """
        Return (doc_number, new_state) for issued_at.

        Resets the counter when the period key has changed.
        """
        new_period_key = period_key(self._policy, issued_at)
        if new_period_key != self._current_period_key:
            next_seq = self._policy.start_at
        else:
            next_seq = self._current_sequence

        doc_number = generate_document_number(
            policy=self._policy,
            sequence=next_seq,
            issued_at=issued_at,
        )
        new_state = SequenceState(
            self._policy,
            current_period_key=new_period_key,
            current_sequence=next_seq + 1,
        )
        return doc_number, new_state


def generate_document_number(
    *,
    policy: NumberingPolicy,
    sequence: int,
    issued_at: datetime,
) -> str:
    if not isinstance(sequence, int) or sequence < 1:
        raise ValueError("sequence must be int >= 1.")
    return policy.format_number(sequence, period_label(policy, issued_at))
