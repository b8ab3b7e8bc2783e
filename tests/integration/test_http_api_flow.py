"""
End-to-end through the Django adapter: login, order → invoice → payment,
procurement receive, and the transport status codes.
"""

from __future__ import annotations

import json

import pytest
from django.test import Client

from conftest import TEST_PASSWORD

pytestmark = pytest.mark.django_db


class Api:
    def __init__(self, client: Client, token: str | None = None):
        self._client = client
        self._token = token

    def _headers(self) -> dict[str, str]:
        if self._token is None:
            return {}
        return {"HTTP_AUTHORIZATION": f"Bearer {self._token}"}

    def get(self, path, **query):
        return self._client.get(f"/v1/{path}", query, **self._headers())

    def send(self, method, path, body=None):
        call = getattr(self._client, method)
        return call(
            f"/v1/{path}",
            data=json.dumps(body or {}),
            content_type="application/json",
            **self._headers(),
        )

    def post(self, path, body=None):
        return self.send("post", path, body)

    def put(self, path, body=None):
        return self.send("put", path, body)

    def delete(self, path):
        return self.send("delete", path)


def _login(email: str) -> Api:
    client = Client()
    response = client.post(
        "/v1/auth/login",
        data=json.dumps({"email": email, "password": TEST_PASSWORD}),
        content_type="application/json",
    )
    assert response.status_code == 200, response.json()
    return Api(client, response.json()["data"]["token"])


@pytest.fixture
def admin_api(admin_user) -> Api:
    return _login(admin_user.email)


@pytest.fixture
def captain_api(captain_user) -> Api:
    return _login(captain_user.email)


# ── Auth ─────────────────────────────────────────────────────

def test_requests_without_session_are_unauthorized():
    response = Api(Client()).get("orders")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_bad_credentials(admin_user):
    response = Client().post(
        "/v1/auth/login",
        data=json.dumps({"email": admin_user.email, "password": "wrong-pass"}),
        content_type="application/json",
    )
    assert response.status_code == 401


def test_me_and_logout(admin_api, admin_user):
    me = admin_api.get("auth/me")
    assert me.status_code == 200
    assert me.json()["data"]["email"] == admin_user.email

    assert admin_api.post("auth/logout").json()["data"] == {"revoked": True}
    assert admin_api.get("auth/me").status_code == 401


def test_method_not_allowed(admin_api):
    response = admin_api.delete("orders")
    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


def test_malformed_json_body(admin_api):
    response = admin_api._client.post(
        "/v1/orders",
        data="{not json",
        content_type="application/json",
        **admin_api._headers(),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_sales_captain_is_forbidden_from_admin_routes(captain_api):
    assert captain_api.get("users").status_code == 403
    assert captain_api.get("vendors").status_code == 403
    response = captain_api.post("admin/master-reset", {"confirmation": "RESET"})
    assert response.status_code == 403


# ── Order → Invoice → Payment ────────────────────────────────

def test_order_to_paid_invoice(admin_api, captain_api, store, masala):
    created = captain_api.post(
        "orders",
        {"store_id": str(store.id), "items": [{"product_id": str(masala.id), "quantity": 10}]},
    )
    assert created.status_code == 201, created.json()
    order = created.json()["data"]
    assert order["status"] == "draft"
    assert order["total_amount"] == "1000.00"

    assert captain_api.put(f"orders/{order['id']}", {"status": "submitted"}).status_code == 200
    forbidden = captain_api.put(f"orders/{order['id']}", {"status": "approved"})
    assert forbidden.status_code == 403
    assert admin_api.put(f"orders/{order['id']}", {"status": "approved"}).status_code == 200

    generated = admin_api.post("invoices/generate", {"order_id": order["id"]})
    assert generated.status_code == 201, generated.json()
    invoice = generated.json()["data"]
    assert invoice["total_amount"] == "1062.00"
    assert invoice["status"] == "draft"

    duplicate = admin_api.post("invoices/generate", {"order_id": order["id"]})
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "INVOICE_ALREADY_EXISTS"

    paid = captain_api.post("payments", {"invoice_id": invoice["id"], "amount": "600"})
    assert paid.status_code == 201
    assert paid.json()["data"]["invoice"]["status"] == "partial"
    assert paid.json()["data"]["invoice"]["balance_amount"] == "462.00"

    too_much = captain_api.post("payments", {"invoice_id": invoice["id"], "amount": "500"})
    assert too_much.status_code == 422
    assert too_much.json()["error"]["message"] == "Amount exceeds balance (462.00)"

    zero = captain_api.post("payments", {"invoice_id": invoice["id"], "amount": "0"})
    assert zero.status_code == 400
    assert zero.json()["error"]["code"] == "NON_POSITIVE_AMOUNT"

    settled = captain_api.post(
        "payments",
        {"invoice_id": invoice["id"], "amount": "462", "payment_mode": "upi"},
    )
    assert settled.json()["data"]["invoice"]["status"] == "paid"

    detail = admin_api.get(f"invoices/{invoice['id']}").json()["data"]
    assert len(detail["payments"]) == 2
    assert detail["tax_summary"]["cgst_amount"] == "81.00"

    blocked = admin_api.delete(f"invoices/{invoice['id']}")
    assert blocked.status_code == 409
    assert blocked.json()["error"]["code"] == "INVOICE_HAS_PAYMENTS"

    payment_id = settled.json()["data"]["payment"]["id"]
    reverted = admin_api.delete(f"payments/{payment_id}")
    assert reverted.status_code == 200
    assert reverted.json()["data"]["invoice"]["status"] == "partial"

    dashboard = admin_api.get("admin/dashboard").json()["data"]
    assert dashboard["order_counts"]["invoiced"] == 1
    assert dashboard["invoice_totals"]["outstanding"] == "462.00"


def test_unknown_order_is_not_found(admin_api):
    response = admin_api.get("orders/8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10")
    assert response.status_code == 404


def test_invalid_uuid_is_a_validation_error(admin_api):
    response = admin_api.get("orders/not-a-uuid")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


# ── Procurement & inventory ──────────────────────────────────

def test_purchase_receive_flow(admin_api, captain_api):
    material = admin_api.post(
        "raw-materials",
        {"name": "Red Chilli", "current_stock": "10", "min_stock": "20"},
    ).json()["data"]
    vendor = admin_api.post("vendors", {"name": "Spice Traders", "phone": "9800000000"}).json()["data"]

    purchase = admin_api.post(
        "purchase-orders",
        {
            "vendor_id": vendor["id"],
            "items": [{"raw_material_id": material["id"], "quantity": "40", "price": "150"}],
        },
    )
    assert purchase.status_code == 201
    purchase_id = purchase.json()["data"]["id"]

    received = admin_api.post(f"purchase-orders/{purchase_id}/receive")
    assert received.status_code == 200
    assert received.json()["data"]["status"] == "reached_office"

    again = admin_api.post(f"purchase-orders/{purchase_id}/receive")
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_RECEIVED"

    movements = admin_api.get(f"raw-materials/{material['id']}/movements").json()["data"]
    assert movements["count"] == 2
    assert sorted(row["stock_after"] for row in movements["items"]) == ["10.000", "50.000"]

    bills = admin_api.get("vendor-bills").json()["data"]["items"]
    assert [bill["amount"] for bill in bills] == ["6000.00"]

    out = captain_api.post(
        "inventory/movements",
        {"raw_material_id": material["id"], "type": "out", "quantity": "51"},
    )
    assert out.status_code == 422
    assert out.json()["error"]["code"] == "INSUFFICIENT_STOCK"

    out = captain_api.post(
        "inventory/movements",
        {"raw_material_id": material["id"], "type": "out", "quantity": "35"},
    )
    assert out.status_code == 201
    assert out.json()["data"]["current_stock"] == "15.000"

    low = admin_api.get("raw-materials/low-stock").json()["data"]
    assert [row["id"] for row in low["items"]] == [material["id"]]


def test_vendor_detail_is_admin_only(admin_api, captain_api):
    vendor = admin_api.post("vendors", {"name": "Spice Traders", "phone": "9800000000"}).json()["data"]

    detail = admin_api.get(f"vendors/{vendor['id']}")
    assert detail.status_code == 200
    assert detail.json()["data"]["name"] == "Spice Traders"

    assert captain_api.get(f"vendors/{vendor['id']}").status_code == 403
    missing = admin_api.get("vendors/8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10")
    assert missing.status_code == 404


# ── Fulfilment ───────────────────────────────────────────────

def test_pending_demand_and_store_orders(admin_api, captain_api, store, masala):
    order = captain_api.post(
        "orders",
        {"store_id": str(store.id), "items": [{"product_id": str(masala.id), "quantity": 4}]},
    ).json()["data"]
    assert admin_api.get("inventory/pending").json()["data"]["count"] == 0

    captain_api.put(f"orders/{order['id']}", {"status": "submitted"})
    assert admin_api.put(f"orders/{order['id']}", {"status": "approved"}).status_code == 200

    pending = admin_api.get("inventory/pending")
    assert pending.status_code == 200
    rows = pending.json()["data"]["items"]
    assert [(row["sku"], row["quantity"], row["order_count"]) for row in rows] == [("GM-100", 4, 1)]

    grouped = captain_api.get("inventory/store-orders")
    assert grouped.status_code == 200
    stores = grouped.json()["data"]["items"]
    assert [(row["store_name"], row["order_count"]) for row in stores] == [("Lakshmi Stores", 1)]
    assert stores[0]["orders"][0]["id"] == order["id"]

    assert Api(Client()).get("inventory/pending").status_code == 401


# ── Out-of-range input ───────────────────────────────────────

def test_oversized_numbers_are_validation_errors(admin_api, captain_api, store, masala):
    order = captain_api.post(
        "orders",
        {"store_id": str(store.id), "items": [{"product_id": str(masala.id), "quantity": 10**15}]},
    )
    assert order.status_code == 400
    assert order.json()["error"]["code"] == "VALIDATION_ERROR"

    order = captain_api.post(
        "orders",
        {"store_id": str(store.id), "items": [{"product_id": str(masala.id), "quantity": 1}]},
    ).json()["data"]
    captain_api.put(f"orders/{order['id']}", {"status": "submitted"})
    admin_api.put(f"orders/{order['id']}", {"status": "approved"})
    invoice = admin_api.post("invoices/generate", {"order_id": order["id"]}).json()["data"]

    payment = captain_api.post("payments", {"invoice_id": invoice["id"], "amount": "1e30"})
    assert payment.status_code == 400
    assert payment.json()["error"]["code"] == "VALIDATION_ERROR"

    material = admin_api.post("raw-materials", {"name": "Cumin", "current_stock": "5"}).json()["data"]
    movement = captain_api.post(
        "inventory/movements",
        {"raw_material_id": material["id"], "type": "in", "quantity": "1e30"},
    )
    assert movement.status_code == 400
    assert movement.json()["error"]["code"] == "VALIDATION_ERROR"


# ── Malformed bodies ─────────────────────────────────────────

def test_malformed_json_without_session_is_unauthorized():
    response = Client().post("/v1/orders", data="{not json", content_type="application/json")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_malformed_json_on_login_is_a_validation_error():
    response = Client().post("/v1/auth/login", data="{not json", content_type="application/json")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
