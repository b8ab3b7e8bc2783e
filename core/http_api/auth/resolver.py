"""
ERP HTTP API Auth - Context Resolvers
=====================================
Resolve the acting user from request headers.

Accepted headers (first match wins):
    Authorization: Bearer <token>
    X-SESSION-TOKEN: <token>
"""

from __future__ import annotations

from typing import Any

from core.context.actor_context import ActorContext
from core.errors import ReasonCode, RejectionReason
from core.http_api.auth.provider import AuthPrincipal

HEADER_AUTHORIZATION = "authorization"
HEADER_SESSION_TOKEN = "x-session-token"
BEARER_PREFIX = "bearer "


def _normalize_headers(headers: dict[str, Any] | None) -> dict[str, str]:
    normalized: dict[str, str] = {}
    for key, value in (headers or {}).items():
        normalized_key = str(key).strip().lower()
        normalized_value = str(value).strip()
        normalized[normalized_key] = normalized_value
    return normalized


def _reject(message: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.UNAUTHORIZED,
        message=message,
        policy_name="http_api_auth_resolver",
    )


def extract_token(headers: dict[str, Any] | None) -> str | None:
    normalized_headers = _normalize_headers(headers)
    authorization = normalized_headers.get(HEADER_AUTHORIZATION, "")
    if authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        if token:
            return token
    token = normalized_headers.get(HEADER_SESSION_TOKEN, "")
    return token or None


def resolve_auth_principal(
    headers: dict[str, Any] | None,
    provider,
) -> AuthPrincipal | RejectionReason:
    token = extract_token(headers)
    if token is None:
        return _reject("Missing session token. Send Authorization: Bearer <token>.")

    principal = provider.resolve_token(token)
    if principal is None:
        return _reject("Invalid or expired session token.")
    return principal


def resolve_actor_context(
    headers: dict[str, Any] | None,
    provider,
) -> ActorContext | RejectionReason:
    principal = resolve_auth_principal(headers, provider)
    if isinstance(principal, RejectionReason):
        return principal
    return ActorContext(
        user_id=principal.user_id,
        role=principal.role,
        name=principal.name,
    )
