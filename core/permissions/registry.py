"""
ERP Permissions - Role to Permission Registry
=============================================
"""

from __future__ import annotations

from core.context.actor_context import ROLE_ADMIN, ROLE_SALES_CAPTAIN
from core.permissions.constants import (
    PERMISSION_INVENTORY_MOVE,
    PERMISSION_ORDERS_CREATE,
    PERMISSION_PAYMENTS_RECORD,
    PERMISSION_PRODUCTION_UPDATE,
    PERMISSION_STORES_CREATE,
    VALID_PERMISSIONS,
)

ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    ROLE_ADMIN: VALID_PERMISSIONS,
    ROLE_SALES_CAPTAIN: frozenset(
        {
            PERMISSION_INVENTORY_MOVE,
            PERMISSION_ORDERS_CREATE,
            PERMISSION_PAYMENTS_RECORD,
            PERMISSION_PRODUCTION_UPDATE,
            PERMISSION_STORES_CREATE,
        }
    ),
}


def permissions_for_role(role: str) -> frozenset[str]:
    return ROLE_PERMISSIONS.get(role, frozenset())
