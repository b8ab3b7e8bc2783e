"""
Manual smoke runner for the ERP Django adapter endpoints.

Usage:
    python scripts/smoke_http_api.py --email admin@example.com --password secret
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000 --email ... --password ...
"""

from __future__ import annotations

import argparse
import json
from urllib import error, request


def _call(
    *,
    method: str,
    url: str,
    headers: dict[str, str],
    body: dict | None = None,
) -> tuple[int, dict]:
    encoded = None
    req_headers = dict(headers)
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=req_headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            status = response.status
            payload = json.loads(response.read().decode("utf-8"))
            return status, payload
    except error.HTTPError as exc:
        payload = json.loads(exc.read().decode("utf-8"))
        return exc.code, payload


def _print_case(label: str, status: int, payload: dict) -> None:
    print(f"\n[{label}] status={status}")
    print(json.dumps(payload, indent=2, sort_keys=True))


def run(base_url: str, email: str, password: str) -> None:
    api = base_url.rstrip("/") + "/v1"

    status, payload = _call(method="GET", url=f"{api}/orders", headers={})
    _print_case("missing-token", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/auth/login",
        headers={},
        body={"email": email, "password": "not-the-password"},
    )
    _print_case("bad-credentials", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/auth/login",
        headers={},
        body={"email": email, "password": password},
    )
    _print_case("login", status, payload)
    if not payload.get("ok"):
        return

    auth = {"Authorization": f"Bearer {payload['data']['token']}"}
    for label, path in (
        ("me", "auth/me"),
        ("orders", "orders"),
        ("invoices", "invoices?status=unpaid"),
        ("low-stock", "raw-materials/low-stock"),
        ("dashboard", "admin/dashboard"),
    ):
        status, payload = _call(method="GET", url=f"{api}/{path}", headers=auth)
        _print_case(label, status, payload)

    status, payload = _call(method="DELETE", url=f"{api}/orders", headers=auth)
    _print_case("method-not-allowed", status, payload)

    status, payload = _call(method="POST", url=f"{api}/auth/logout", headers=auth)
    _print_case("logout", status, payload)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()
    run(args.base_url, args.email, args.password)


if __name__ == "__main__":
    main()
