"""
ERP Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("auth/login", views.login_view),
    path("auth/logout", views.logout_view),
    path("auth/me", views.me_view),
    path("users", views.users_view),
    path("users/<str:user_id>", views.user_view),
    path("areas", views.areas_view),
    path("stores", views.stores_view),
    path("stores/<str:store_id>", views.store_view),
    path("products", views.products_view),
    path("products/<str:product_id>", views.product_view),
    path("orders", views.orders_view),
    path("orders/<str:order_id>", views.order_view),
    path("invoices", views.invoices_view),
    path("invoices/generate", views.invoice_generate_view),
    path("invoices/<str:invoice_id>", views.invoice_view),
    path("invoices/<str:invoice_id>/approve", views.invoice_approve_view),
    path("payments", views.payments_view),
    path("payments/<str:payment_id>", views.payment_view),
    path("raw-materials", views.raw_materials_view),
    path("raw-materials/low-stock", views.low_stock_view),
    path("raw-materials/<str:raw_material_id>/movements", views.raw_material_movements_view),
    path("inventory/movements", views.stock_movement_view),
    path("inventory/pending", views.pending_demand_view),
    path("inventory/store-orders", views.store_orders_view),
    path("vendors", views.vendors_view),
    path("vendors/<str:vendor_id>", views.vendor_view),
    path("purchase-orders", views.purchase_orders_view),
    path("purchase-orders/<str:purchase_order_id>", views.purchase_order_view),
    path(
        "purchase-orders/<str:purchase_order_id>/receive",
        views.purchase_order_receive_view,
    ),
    path("vendor-bills", views.vendor_bills_view),
    path("vendor-bills/<str:bill_id>", views.vendor_bill_view),
    path("production", views.productions_view),
    path("production/<str:production_id>", views.production_view),
    path("admin/dashboard", views.dashboard_view),
    path("admin/master-reset", views.master_reset_view),
]
