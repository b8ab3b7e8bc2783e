"""
ERP HTTP API - Production Handlers
==================================
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import authenticated, list_payload, optional_text
from engines.production.commands import ProductionCreateRequest, ProductionUpdateRequest
from engines.production.services import (
    create_production,
    list_productions,
    serialize_production,
    update_production,
)


def get_productions(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="production.list",
        call=lambda actor: list_payload(
            serialize_production(production)
            for production in list_productions(status=optional_text(params, "status"))
        ),
    )


def post_production_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = ProductionCreateRequest(
            product_name=params.get("product_name"),
            quantity=params.get("quantity"),
            notes=params.get("notes", ""),
        )
        return serialize_production(create_production(request, actor=actor))

    return authenticated(dependencies, headers, operation="production.create", call=_call)


def post_production_update(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = ProductionUpdateRequest(
            production_id=params.get("production_id"),
            status=params.get("status"),
            notes=params.get("notes"),
        )
        return serialize_production(update_production(request, actor=actor))

    return authenticated(dependencies, headers, operation="production.update", call=_call)
