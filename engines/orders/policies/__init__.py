"""
ERP Orders Engine — Policies
============================
Order status state machine and ownership rules.

    draft      → submitted | cancelled
    submitted  → approved  | cancelled
    approved   → invoiced  | cancelled
    invoiced   → (terminal)
    cancelled  → (terminal)

Only admins approve. Policies return None when allowed, otherwise a
RejectionReason.
"""

from __future__ import annotations

from typing import Optional

from core.context.actor_context import ActorContext
from core.errors import ReasonCode, RejectionReason
from engines.orders.models import OrderStatus

ORDER_TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.DRAFT: frozenset({OrderStatus.SUBMITTED, OrderStatus.CANCELLED}),
    OrderStatus.SUBMITTED: frozenset({OrderStatus.APPROVED, OrderStatus.CANCELLED}),
    OrderStatus.APPROVED: frozenset({OrderStatus.INVOICED, OrderStatus.CANCELLED}),
    OrderStatus.INVOICED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

DELETABLE_STATUSES = frozenset(
    {
        OrderStatus.DRAFT,
        OrderStatus.CANCELLED,
        OrderStatus.SUBMITTED,
        OrderStatus.APPROVED,
    }
)


def can_transition(current: str, target: str) -> bool:
    return target in ORDER_TRANSITIONS.get(current, frozenset())


def is_order_owner(actor: ActorContext, created_by_id) -> bool:
    return str(created_by_id) == actor.user_id


def order_transition_policy(
    *,
    current: str,
    target: str,
    actor: ActorContext,
) -> Optional[RejectionReason]:
    if target not in ORDER_TRANSITIONS:
        return RejectionReason(
            code=ReasonCode.VALIDATION_ERROR,
            message=f"Unknown order status '{target}'.",
            policy_name="order_transition_policy",
        )

    if not can_transition(current, target):
        return RejectionReason(
            code=ReasonCode.INVALID_TRANSITION,
            message=f"Cannot change status from {current} to {target}.",
            policy_name="order_transition_policy",
        )

    if target == OrderStatus.APPROVED and not actor.is_admin:
        return RejectionReason(
            code=ReasonCode.FORBIDDEN,
            message="Only admins can approve orders.",
            policy_name="order_transition_policy",
        )

    return None


def manual_status_update_policy(target: str) -> Optional[RejectionReason]:
    """Invoicing owns the approved → invoiced step."""
    if target == OrderStatus.INVOICED:
        return RejectionReason(
            code=ReasonCode.VALIDATION_ERROR,
            message="Orders become invoiced only by generating an invoice.",
            policy_name="manual_status_update_policy",
        )
    return None


def order_delete_policy(
    *,
    status: str,
    created_by_id,
    actor: ActorContext,
) -> Optional[RejectionReason]:
    if status not in DELETABLE_STATUSES:
        return RejectionReason(
            code=ReasonCode.ORDER_NOT_DELETABLE,
            message=f"Cannot delete an order in status {status}.",
            policy_name="order_delete_policy",
        )

    if status == OrderStatus.APPROVED and not actor.is_admin:
        return RejectionReason(
            code=ReasonCode.FORBIDDEN,
            message="Only admins can delete approved orders.",
            policy_name="order_delete_policy",
        )

    if not actor.is_admin and not is_order_owner(actor, created_by_id):
        return RejectionReason(
            code=ReasonCode.FORBIDDEN,
            message="Only the creator or an admin can delete this order.",
            policy_name="order_delete_policy",
        )

    return None


def order_visibility_policy(
    *,
    created_by_id,
    actor: ActorContext,
) -> Optional[RejectionReason]:
    if actor.is_admin or is_order_owner(actor, created_by_id):
        return None
    return RejectionReason(
        code=ReasonCode.FORBIDDEN,
        message="You can only view your own orders.",
        policy_name="order_visibility_policy",
    )
