"""
ERP HTTP API Auth - Request Context
===================================
Framework-agnostic context resolution used by every handler.
"""

from __future__ import annotations

from typing import Any

from core.context.actor_context import ActorContext
from core.errors import ReasonCode, RejectionReason
from core.http_api.auth.resolver import resolve_actor_context


def resolve_request_context(
    headers: dict[str, Any] | None,
    auth_provider,
) -> ActorContext | RejectionReason:
    if auth_provider is None:
        return RejectionReason(
            code=ReasonCode.UNAUTHORIZED,
            message="Auth provider is not configured.",
            policy_name="http_api_auth_middleware",
        )
    return resolve_actor_context(headers, auth_provider)
