"""
ERP HTTP API - Session Handlers
===============================
"""

from __future__ import annotations

from typing import Any

from core.auth.service import login, revoke_session, serialize_session
from core.http_api.auth.resolver import extract_token
from core.http_api.handlers.base import authenticated, run_handler
from core.identity.service import get_user, serialize_user


def post_login(
    params: dict[str, Any],
    dependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _call():
        raw_token, session, user = login(
            email=params.get("email"),
            password=params.get("password"),
            now=dependencies.clock.now_utc(),
        )
        return {
            "token": raw_token,
            "session": serialize_session(session),
            "user": serialize_user(user),
        }

    return run_handler(_call, operation="auth.login")


def post_logout(
    params: dict[str, Any],
    dependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _call(actor):
        revoked = revoke_session(
            extract_token(headers),
            now=dependencies.clock.now_utc(),
        )
        return {"revoked": revoked}

    return authenticated(dependencies, headers, operation="auth.logout", call=_call)


def get_me(
    params: dict[str, Any],
    dependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return authenticated(
        dependencies,
        headers,
        operation="auth.me",
        call=lambda actor: serialize_user(get_user(actor.user_id)),
    )
