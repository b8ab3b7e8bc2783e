"""
ERP Permissions - Evaluator
===========================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.context.actor_context import ActorContext
from core.errors import ReasonCode, RejectionReason, raise_for_rejection
from core.permissions.constants import VALID_PERMISSIONS
from core.permissions.registry import permissions_for_role


@dataclass(frozen=True)
class PermissionEvaluationResult:
    allowed: bool
    rejection_code: Optional[str] = None
    message: str = ""


class PermissionEvaluator:
    @staticmethod
    def evaluate(
        *,
        actor: Optional[ActorContext],
        permission: str,
    ) -> PermissionEvaluationResult:
        if permission not in VALID_PERMISSIONS:
            raise ValueError(f"Unknown permission '{permission}'.")
        if actor is None:
            return PermissionEvaluationResult(
                allowed=False,
                rejection_code=ReasonCode.UNAUTHORIZED,
                message="Authentication required.",
            )
        if permission in permissions_for_role(actor.role):
            return PermissionEvaluationResult(allowed=True)
        return PermissionEvaluationResult(
            allowed=False,
            rejection_code=ReasonCode.FORBIDDEN,
            message=f"Role '{actor.role}' lacks permission '{permission}'.",
        )


def permission_policy(
    actor: Optional[ActorContext],
    permission: str,
    *,
    policy_name: str = "permission_policy",
) -> Optional[RejectionReason]:
    result = PermissionEvaluator.evaluate(actor=actor, permission=permission)
    if result.allowed:
        return None
    return RejectionReason(
        code=result.rejection_code or ReasonCode.FORBIDDEN,
        message=result.message or "Permission denied.",
        policy_name=policy_name,
    )


def has_permission(actor: Optional[ActorContext], permission: str) -> bool:
    return PermissionEvaluator.evaluate(actor=actor, permission=permission).allowed


def require_permission(
    actor: Optional[ActorContext],
    permission: str,
    *,
    policy_name: str = "permission_policy",
) -> None:
    """Raise Unauthorized/Forbidden when actor lacks permission."""
    raise_for_rejection(
        permission_policy(actor, permission, policy_name=policy_name)
    )
