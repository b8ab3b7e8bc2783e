"""
ERP HTTP API Auth - Public API
==============================
"""

from core.http_api.auth.middleware import resolve_request_context
from core.http_api.auth.provider import (
    AuthPrincipal,
    AuthProvider,
    InMemoryAuthProvider,
)
from core.http_api.auth.resolver import (
    extract_token,
    resolve_actor_context,
    resolve_auth_principal,
)

__all__ = [
    "AuthPrincipal",
    "AuthProvider",
    "InMemoryAuthProvider",
    "extract_token",
    "resolve_actor_context",
    "resolve_auth_principal",
    "resolve_request_context",
]
