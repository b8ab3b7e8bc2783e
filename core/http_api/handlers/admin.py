"""
ERP HTTP API - Admin Handlers
=============================
"""

from __future__ import annotations

from typing import Any

from core.admin import (
    MasterResetRequest,
    build_dashboard_summary,
    master_reset,
    serialize_dashboard_summary,
)
from core.http_api.handlers.base import authenticated


def get_dashboard(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="admin.dashboard",
        call=lambda actor: serialize_dashboard_summary(build_dashboard_summary()),
    )


def post_master_reset(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        request = MasterResetRequest(confirmation=params.get("confirmation"))
        result = master_reset(request, actor=actor)
        return {
            "message": "Master reset successful. All transaction data cleared.",
            "deleted": result.deleted,
            "raw_materials_reset": result.raw_materials_reset,
        }

    return authenticated(dependencies, headers, operation="admin.master_reset", call=_call)
