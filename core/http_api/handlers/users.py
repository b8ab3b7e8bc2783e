"""
ERP HTTP API - User Handlers
============================
"""

from __future__ import annotations

from typing import Any

from core.http_api.handlers.base import authenticated, changes_from, list_payload
from core.identity.models import UserRole
from core.identity.service import (
    create_user,
    deactivate_user,
    list_users,
    serialize_user,
    update_user,
)


def get_users(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="users.list",
        call=lambda actor: list_payload(
            serialize_user(user) for user in list_users(actor=actor)
        ),
    )


def post_user_create(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        user = create_user(
            actor=actor,
            email=params.get("email"),
            password=params.get("password"),
            name=params.get("name"),
            role=params.get("role") or UserRole.SALES_CAPTAIN,
        )
        return serialize_user(user)

    return authenticated(dependencies, headers, operation="users.create", call=_call)


def post_user_update(params, dependencies, headers=None) -> dict[str, Any]:
    def _call(actor):
        user = update_user(
            actor=actor,
            user_id=params.get("user_id"),
            changes=changes_from(params, exclude=("user_id",)),
        )
        return serialize_user(user)

    return authenticated(dependencies, headers, operation="users.update", call=_call)


def post_user_delete(params, dependencies, headers=None) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="users.delete",
        call=lambda actor: serialize_user(
            deactivate_user(actor=actor, user_id=params.get("user_id"))
        ),
    )
