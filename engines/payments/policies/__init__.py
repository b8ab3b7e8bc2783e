"""
ERP Payments Engine — Policies
==============================
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from core.errors import ReasonCode, RejectionReason
from core.primitives import ZERO, money_str


def payment_amount_policy(
    *,
    amount: Decimal,
    balance_amount: Decimal,
) -> Optional[RejectionReason]:
    """A payment is accepted iff 0 < amount <= balance."""
    if amount <= ZERO:
        return RejectionReason(
            code=ReasonCode.NON_POSITIVE_AMOUNT,
            message="Amount must be greater than 0",
            policy_name="payment_amount_policy",
        )
    if amount > balance_amount:
        return RejectionReason(
            code=ReasonCode.AMOUNT_EXCEEDS_BALANCE,
            message=f"Amount exceeds balance ({money_str(balance_amount)})",
            policy_name="payment_amount_policy",
        )
    return None
