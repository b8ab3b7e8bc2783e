"""
ERP HTTP API - Handlers
=======================
"""

from core.http_api.handlers.admin import get_dashboard, post_master_reset
from core.http_api.handlers.auth import get_me, post_login, post_logout
from core.http_api.handlers.inventory import (
    get_low_stock,
    get_movements,
    get_raw_materials,
    post_raw_material_create,
    post_stock_movement,
)
from core.http_api.handlers.invoices import (
    get_invoice_detail,
    get_invoices,
    post_invoice_approve,
    post_invoice_delete,
    post_invoice_generate,
)
from core.http_api.handlers.orders import (
    get_order_detail,
    get_orders,
    get_pending_demand,
    get_store_orders,
    post_order_create,
    post_order_delete,
    post_order_update,
)
from core.http_api.handlers.payments import (
    get_payments,
    post_payment_delete,
    post_payment_record,
)
from core.http_api.handlers.procurement import (
    get_purchase_order_detail,
    get_purchase_orders,
    get_vendor_bills,
    get_vendor_detail,
    get_vendors,
    post_purchase_order_create,
    post_purchase_order_receive,
    post_vendor_bill_update,
    post_vendor_create,
    post_vendor_delete,
    post_vendor_update,
)
from core.http_api.handlers.production import (
    get_productions,
    post_production_create,
    post_production_update,
)
from core.http_api.handlers.products import (
    get_product_detail,
    get_products,
    post_product_create,
    post_product_delete,
    post_product_update,
)
from core.http_api.handlers.stores import (
    get_areas,
    get_store_detail,
    get_stores,
    post_area_create,
    post_store_create,
    post_store_delete,
    post_store_update,
)
from core.http_api.handlers.users import (
    get_users,
    post_user_create,
    post_user_delete,
    post_user_update,
)

__all__ = [
    "post_login",
    "post_logout",
    "get_me",
    "get_users",
    "post_user_create",
    "post_user_update",
    "post_user_delete",
    "get_areas",
    "post_area_create",
    "get_stores",
    "get_store_detail",
    "post_store_create",
    "post_store_update",
    "post_store_delete",
    "get_products",
    "get_product_detail",
    "post_product_create",
    "post_product_update",
    "post_product_delete",
    "get_orders",
    "get_order_detail",
    "post_order_create",
    "post_order_update",
    "post_order_delete",
    "get_pending_demand",
    "get_store_orders",
    "get_invoices",
    "get_invoice_detail",
    "post_invoice_generate",
    "post_invoice_approve",
    "post_invoice_delete",
    "get_payments",
    "post_payment_record",
    "post_payment_delete",
    "get_raw_materials",
    "post_raw_material_create",
    "post_stock_movement",
    "get_movements",
    "get_low_stock",
    "get_vendors",
    "get_vendor_detail",
    "post_vendor_create",
    "post_vendor_update",
    "post_vendor_delete",
    "get_purchase_orders",
    "get_purchase_order_detail",
    "post_purchase_order_create",
    "post_purchase_order_receive",
    "get_vendor_bills",
    "post_vendor_bill_update",
    "get_productions",
    "post_production_create",
    "post_production_update",
    "get_dashboard",
    "post_master_reset",
]
