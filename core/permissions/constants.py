"""
ERP Permissions - Constants
===========================
"""

PERMISSION_USERS_MANAGE = "users.manage"
PERMISSION_AREAS_MANAGE = "areas.manage"
PERMISSION_STORES_CREATE = "stores.create"
PERMISSION_STORES_MANAGE = "stores.manage"
PERMISSION_PRODUCTS_MANAGE = "products.manage"
PERMISSION_ORDERS_CREATE = "orders.create"
PERMISSION_ORDERS_APPROVE = "orders.approve"
PERMISSION_ORDERS_VIEW_ALL = "orders.view_all"
PERMISSION_INVOICES_MANAGE = "invoices.manage"
PERMISSION_PAYMENTS_RECORD = "payments.record"
PERMISSION_PAYMENTS_DELETE = "payments.delete"
PERMISSION_PAYMENTS_VIEW_ALL = "payments.view_all"
PERMISSION_INVENTORY_MOVE = "inventory.move"
PERMISSION_INVENTORY_MANAGE = "inventory.manage"
PERMISSION_PROCUREMENT_MANAGE = "procurement.manage"
PERMISSION_PRODUCTION_MANAGE = "production.manage"
PERMISSION_PRODUCTION_UPDATE = "production.update"
PERMISSION_SYSTEM_RESET = "system.reset"

VALID_PERMISSIONS = frozenset(
    {
        PERMISSION_USERS_MANAGE,
        PERMISSION_AREAS_MANAGE,
        PERMISSION_STORES_CREATE,
        PERMISSION_STORES_MANAGE,
        PERMISSION_PRODUCTS_MANAGE,
        PERMISSION_ORDERS_CREATE,
        PERMISSION_ORDERS_APPROVE,
        PERMISSION_ORDERS_VIEW_ALL,
        PERMISSION_INVOICES_MANAGE,
        PERMISSION_PAYMENTS_RECORD,
        PERMISSION_PAYMENTS_DELETE,
        PERMISSION_PAYMENTS_VIEW_ALL,
        PERMISSION_INVENTORY_MOVE,
        PERMISSION_INVENTORY_MANAGE,
        PERMISSION_PROCUREMENT_MANAGE,
        PERMISSION_PRODUCTION_MANAGE,
        PERMISSION_PRODUCTION_UPDATE,
        PERMISSION_SYSTEM_RESET,
    }
)
