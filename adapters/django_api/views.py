"""
ERP Django Adapter Views
========================
Pass-through HTTP views over core/http_api handlers.

A view only parses the request: path, query and JSON body values are
merged into one params dict (path wins over body, body over query).
Status codes come from the handler envelope.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.errors import ReasonCode, RejectionReason
from core.http_api import handlers
from core.http_api.auth.middleware import resolve_request_context
from core.http_api.errors import (
    error_response,
    http_status_for_payload,
    rejection_response,
)

Handler = Callable[..., dict[str, Any]]

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _headers_from_request(request: HttpRequest) -> dict[str, str]:
    return {str(key): str(value) for key, value in request.headers.items()}


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        ReasonCode.METHOD_NOT_ALLOWED,
        "Method not allowed for this endpoint.",
        status=405,
    )


def _body_error(request: HttpRequest, exc: ValueError, *, public: bool) -> JsonResponse:
    """Unparseable body: 401 for a caller without a valid session, 400 otherwise."""
    if not public:
        resolved = resolve_request_context(
            _headers_from_request(request),
            build_dependencies().auth_provider,
        )
        if isinstance(resolved, RejectionReason):
            payload = rejection_response(resolved)
            return JsonResponse(payload, status=http_status_for_payload(payload))
    return _json_error(ReasonCode.VALIDATION_ERROR, str(exc), status=400)


def _dispatch(
    handler: Handler,
    request: HttpRequest,
    *,
    path_params: dict[str, Any],
    success_status: int = 200,
    public: bool = False,
) -> JsonResponse:
    params: dict[str, Any] = dict(request.GET.items())
    if request.method in _BODY_METHODS:
        try:
            params.update(_parse_json_body(request))
        except ValueError as exc:
            return _body_error(request, exc, public=public)
    params.update(path_params)

    payload = handler(
        params,
        build_dependencies(),
        headers=_headers_from_request(request),
    )
    return JsonResponse(
        payload,
        status=http_status_for_payload(payload, success_status=success_status),
    )


def resource(*, public: bool = False, **routes: Handler | tuple[Handler, int]):
    """
    Build one view for a URL that routes on the HTTP method.

    resource(get=list_handler, post=(create_handler, 201))

    public marks routes that need no session (login).
    """
    table: dict[str, tuple[Handler, int]] = {}
    for method, route in routes.items():
        handler, status = route if isinstance(route, tuple) else (route, 200)
        table[method.upper()] = (handler, status)

    @csrf_exempt
    def view(request: HttpRequest, **path_params) -> JsonResponse:
        route = table.get(request.method)
        if route is None:
            return _method_not_allowed()
        handler, status = route
        return _dispatch(
            handler,
            request,
            path_params=path_params,
            success_status=status,
            public=public,
        )

    return view


# ── Auth ──────────────────────────────────────────────────────
login_view = resource(post=handlers.post_login, public=True)
logout_view = resource(post=handlers.post_logout)
me_view = resource(get=handlers.get_me)

# ── Users ─────────────────────────────────────────────────────
users_view = resource(get=handlers.get_users, post=(handlers.post_user_create, 201))
user_view = resource(put=handlers.post_user_update, delete=handlers.post_user_delete)

# ── Areas & Stores ────────────────────────────────────────────
areas_view = resource(get=handlers.get_areas, post=(handlers.post_area_create, 201))
stores_view = resource(get=handlers.get_stores, post=(handlers.post_store_create, 201))
store_view = resource(
    get=handlers.get_store_detail,
    put=handlers.post_store_update,
    delete=handlers.post_store_delete,
)

# ── Products ──────────────────────────────────────────────────
products_view = resource(
    get=handlers.get_products,
    post=(handlers.post_product_create, 201),
)
product_view = resource(
    get=handlers.get_product_detail,
    put=handlers.post_product_update,
    delete=handlers.post_product_delete,
)

# ── Orders ────────────────────────────────────────────────────
orders_view = resource(get=handlers.get_orders, post=(handlers.post_order_create, 201))
order_view = resource(
    get=handlers.get_order_detail,
    put=handlers.post_order_update,
    delete=handlers.post_order_delete,
)

# ── Invoices ──────────────────────────────────────────────────
invoices_view = resource(get=handlers.get_invoices)
invoice_generate_view = resource(post=(handlers.post_invoice_generate, 201))
invoice_view = resource(
    get=handlers.get_invoice_detail,
    delete=handlers.post_invoice_delete,
)
invoice_approve_view = resource(post=handlers.post_invoice_approve)

# ── Payments ──────────────────────────────────────────────────
payments_view = resource(
    get=handlers.get_payments,
    post=(handlers.post_payment_record, 201),
)
payment_view = resource(delete=handlers.post_payment_delete)

# ── Inventory ─────────────────────────────────────────────────
raw_materials_view = resource(
    get=handlers.get_raw_materials,
    post=(handlers.post_raw_material_create, 201),
)
raw_material_movements_view = resource(get=handlers.get_movements)
low_stock_view = resource(get=handlers.get_low_stock)
stock_movement_view = resource(post=(handlers.post_stock_movement, 201))
pending_demand_view = resource(get=handlers.get_pending_demand)
store_orders_view = resource(get=handlers.get_store_orders)

# ── Procurement ───────────────────────────────────────────────
vendors_view = resource(get=handlers.get_vendors, post=(handlers.post_vendor_create, 201))
vendor_view = resource(
    get=handlers.get_vendor_detail,
    put=handlers.post_vendor_update,
    delete=handlers.post_vendor_delete,
)
purchase_orders_view = resource(
    get=handlers.get_purchase_orders,
    post=(handlers.post_purchase_order_create, 201),
)
purchase_order_view = resource(get=handlers.get_purchase_order_detail)
purchase_order_receive_view = resource(post=handlers.post_purchase_order_receive)
vendor_bills_view = resource(get=handlers.get_vendor_bills)
vendor_bill_view = resource(put=handlers.post_vendor_bill_update)

# ── Production ────────────────────────────────────────────────
productions_view = resource(
    get=handlers.get_productions,
    post=(handlers.post_production_create, 201),
)
production_view = resource(put=handlers.post_production_update)

# ── Admin ─────────────────────────────────────────────────────
dashboard_view = resource(get=handlers.get_dashboard)
master_reset_view = resource(post=handlers.post_master_reset)
