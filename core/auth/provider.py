"""
ERP Auth - DB-backed Auth Provider
==================================
Resolves session tokens from persistent storage.
"""

from __future__ import annotations

from core.auth.models import SessionStatus
from core.auth.service import hash_token
from core.http_api.auth.provider import AuthPrincipal, AuthProvider
from core.time.clock import Clock, SystemClock


class DbAuthProvider(AuthProvider):
    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()

    def resolve_token(self, token: str) -> AuthPrincipal | None:
        if not isinstance(token, str) or not token.strip():
            return None

        from core.auth.models import SessionToken

        session = (
            SessionToken.objects.select_related("user")
            .filter(
                token_hash=hash_token(token),
                status=SessionStatus.ACTIVE,
                expires_at__gt=self._clock.now_utc(),
            )
            .first()
        )
        if session is None or not session.user.is_active:
            return None

        user = session.user
        return AuthPrincipal(
            user_id=str(user.id),
            role=user.role,
            name=user.name,
        )
