"""
ERP Auth - Session Service
==========================
Login, logout and token hashing.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Any

from django.conf import settings

from core.auth.models import SessionStatus, SessionToken
from core.errors import Unauthorized
from core.identity.models import User
from core.identity.service import authenticate
from core.primitives import clean_string

logger = logging.getLogger("erp.auth")

TOKEN_PREFIX = "erp_"


def hash_token(token: str) -> str:
    raw = clean_string(token, field_name="token")
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def new_raw_token() -> str:
    return f"{TOKEN_PREFIX}{secrets.token_urlsafe(32)}"


def session_ttl() -> timedelta:
    return timedelta(hours=getattr(settings, "ERP_SESSION_TTL_HOURS", 12))


def serialize_session(session: SessionToken) -> dict[str, Any]:
    return {
        "id": str(session.id),
        "status": session.status,
        "created_at": session.created_at.isoformat(),
        "expires_at": session.expires_at.isoformat(),
    }


def issue_session(user: User, *, now: datetime) -> tuple[str, SessionToken]:
    raw_token = new_raw_token()
    session = SessionToken.objects.create(
        token_hash=hash_token(raw_token),
        user=user,
        status=SessionStatus.ACTIVE,
        created_at=now,
        expires_at=now + session_ttl(),
    )
    return raw_token, session


def login(*, email: Any, password: Any, now: datetime) -> tuple[str, SessionToken, User]:
    user = authenticate(email, password)
    if user is None:
        logger.info("Login rejected: invalid credentials or inactive user.")
        raise Unauthorized("Invalid email or password.", policy_name="login")
    raw_token, session = issue_session(user, now=now)
    logger.info(f"User {user.id} logged in; session {session.id} issued.")
    return raw_token, session, user


def revoke_session(token: str, *, now: datetime) -> bool:
    session = SessionToken.objects.filter(token_hash=hash_token(token)).first()
    if session is None or session.status == SessionStatus.REVOKED:
        return False
    session.status = SessionStatus.REVOKED
    session.revoked_at = now
    session.save(update_fields=["status", "revoked_at"])
    logger.info(f"Session {session.id} revoked.")
    return True
