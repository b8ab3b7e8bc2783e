"""
ERP Procurement Engine — Policies
=================================
    purchase order:  pending → reached_office (once)
    vendor bill:     pending_dispatch → sent_to_vendor → paid
"""

from __future__ import annotations

from typing import Optional

from core.errors import ReasonCode, RejectionReason
from engines.procurement.models import PurchaseOrderStatus, VendorBillStatus

VENDOR_BILL_TRANSITIONS: dict[str, frozenset[str]] = {
    VendorBillStatus.PENDING_DISPATCH: frozenset({VendorBillStatus.SENT_TO_VENDOR}),
    VendorBillStatus.SENT_TO_VENDOR: frozenset({VendorBillStatus.PAID}),
    VendorBillStatus.PAID: frozenset(),
}


def receive_policy(*, status: str) -> Optional[RejectionReason]:
    if status == PurchaseOrderStatus.REACHED_OFFICE:
        return RejectionReason(
            code=ReasonCode.ALREADY_RECEIVED,
            message="Purchase order already received",
            policy_name="receive_policy",
        )
    return None


def vendor_bill_transition_policy(*, current: str, target: str) -> Optional[RejectionReason]:
    if target not in VENDOR_BILL_TRANSITIONS:
        return RejectionReason(
            code=ReasonCode.VALIDATION_ERROR,
            message=f"Unknown vendor bill status '{target}'.",
            policy_name="vendor_bill_transition_policy",
        )
    if target not in VENDOR_BILL_TRANSITIONS.get(current, frozenset()):
        return RejectionReason(
            code=ReasonCode.INVALID_TRANSITION,
            message=f"Cannot change status from {current} to {target}.",
            policy_name="vendor_bill_transition_policy",
        )
    return None
