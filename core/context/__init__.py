"""
ERP Context - Public API
========================
"""

from core.context.actor_context import (
    ROLE_ADMIN,
    ROLE_SALES_CAPTAIN,
    VALID_ROLES,
    ActorContext,
)

__all__ = [
    "ROLE_ADMIN",
    "ROLE_SALES_CAPTAIN",
    "VALID_ROLES",
    "ActorContext",
]
