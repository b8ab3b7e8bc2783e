"""
ERP HTTP API Auth - Provider and Principal Models
=================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol

from core.context.actor_context import VALID_ROLES


@dataclass(frozen=True)
class AuthPrincipal:
    user_id: str
    role: str
    name: str = ""

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        if self.role not in VALID_ROLES:
            raise ValueError(f"role must be one of {sorted(VALID_ROLES)}.")


class AuthProvider(Protocol):
    def resolve_token(self, token: str) -> AuthPrincipal | None:
        ...


class InMemoryAuthProvider:
    """
    Deterministic in-memory auth provider for tests.
    """

    def __init__(self, token_to_principal: Mapping[str, AuthPrincipal] | None = None):
        normalized: dict[str, AuthPrincipal] = {}
        for token, principal in dict(token_to_principal or {}).items():
            if not isinstance(token, str) or not token.strip():
                raise ValueError("Token must be a non-empty string.")
            if not isinstance(principal, AuthPrincipal):
                raise ValueError("Principal must be AuthPrincipal.")
            normalized[token] = principal
        self._token_to_principal = normalized

    def resolve_token(self, token: str) -> AuthPrincipal | None:
        if not isinstance(token, str):
            return None
        return self._token_to_principal.get(token)
