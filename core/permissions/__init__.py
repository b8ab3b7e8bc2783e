"""
ERP Permissions - Public API
============================
"""

from core.permissions.constants import (
    PERMISSION_AREAS_MANAGE,
    PERMISSION_INVENTORY_MANAGE,
    PERMISSION_INVENTORY_MOVE,
    PERMISSION_INVOICES_MANAGE,
    PERMISSION_ORDERS_APPROVE,
    PERMISSION_ORDERS_CREATE,
    PERMISSION_ORDERS_VIEW_ALL,
    PERMISSION_PAYMENTS_DELETE,
    PERMISSION_PAYMENTS_RECORD,
    PERMISSION_PAYMENTS_VIEW_ALL,
    PERMISSION_PROCUREMENT_MANAGE,
    PERMISSION_PRODUCTION_MANAGE,
    PERMISSION_PRODUCTION_UPDATE,
    PERMISSION_PRODUCTS_MANAGE,
    PERMISSION_STORES_CREATE,
    PERMISSION_STORES_MANAGE,
    PERMISSION_SYSTEM_RESET,
    PERMISSION_USERS_MANAGE,
    VALID_PERMISSIONS,
)
from core.permissions.evaluator import (
    PermissionEvaluationResult,
    PermissionEvaluator,
    has_permission,
    permission_policy,
    require_permission,
)
from core.permissions.registry import ROLE_PERMISSIONS, permissions_for_role

__all__ = [
    "PERMISSION_AREAS_MANAGE",
    "PERMISSION_INVENTORY_MANAGE",
    "PERMISSION_INVENTORY_MOVE",
    "PERMISSION_INVOICES_MANAGE",
    "PERMISSION_ORDERS_APPROVE",
    "PERMISSION_ORDERS_CREATE",
    "PERMISSION_ORDERS_VIEW_ALL",
    "PERMISSION_PAYMENTS_DELETE",
    "PERMISSION_PAYMENTS_RECORD",
    "PERMISSION_PAYMENTS_VIEW_ALL",
    "PERMISSION_PROCUREMENT_MANAGE",
    "PERMISSION_PRODUCTION_MANAGE",
    "PERMISSION_PRODUCTION_UPDATE",
    "PERMISSION_PRODUCTS_MANAGE",
    "PERMISSION_STORES_CREATE",
    "PERMISSION_STORES_MANAGE",
    "PERMISSION_SYSTEM_RESET",
    "PERMISSION_USERS_MANAGE",
    "ROLE_PERMISSIONS",
    "VALID_PERMISSIONS",
    "PermissionEvaluationResult",
    "PermissionEvaluator",
    "has_permission",
    "permission_policy",
    "permissions_for_role",
    "require_permission",
]
