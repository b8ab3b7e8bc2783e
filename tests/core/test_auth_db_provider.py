from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import TEST_PASSWORD
from core.auth.models import SessionStatus, SessionToken
from core.auth.provider import DbAuthProvider
from core.auth.service import hash_token, login, revoke_session
from core.errors import RejectionReason, Unauthorized
from core.http_api.auth import resolve_actor_context
from core.time.clock import FixedClock

pytestmark = pytest.mark.django_db(transaction=True)


def test_login_issues_hashed_session(admin_user, clock):
    raw_token, session, user = login(
        email=" Admin@Example.com ",
        password=TEST_PASSWORD,
        now=clock.now_utc(),
    )
    assert user.id == admin_user.id
    assert raw_token.startswith("erp_")
    assert session.token_hash == hash_token(raw_token)
    assert raw_token not in session.token_hash
    assert session.expires_at == clock.now_utc() + timedelta(hours=12)


def test_login_rejects_wrong_password(admin_user, clock):
    with pytest.raises(Unauthorized):
        login(email="admin@example.com", password="not-it", now=clock.now_utc())


def test_inactive_user_cannot_login(captain_user, clock):
    captain_user.is_active = False
    captain_user.save()
    with pytest.raises(Unauthorized):
        login(email="captain@example.com", password=TEST_PASSWORD, now=clock.now_utc())


def test_db_provider_resolves_active_session(admin_user, clock):
    raw_token, _, _ = login(email="admin@example.com", password=TEST_PASSWORD, now=clock.now_utc())
    principal = DbAuthProvider(clock=clock).resolve_token(raw_token)
    assert principal is not None
    assert principal.user_id == str(admin_user.id)
    assert principal.role == "admin"


def test_db_provider_rejects_expired_session(admin_user, clock):
    raw_token, _, _ = login(email="admin@example.com", password=TEST_PASSWORD, now=clock.now_utc())
    later = FixedClock(clock.now_utc() + timedelta(hours=12, seconds=1))
    assert DbAuthProvider(clock=later).resolve_token(raw_token) is None


def test_revoked_session_no_longer_resolves(admin_user, clock):
    raw_token, session, _ = login(email="admin@example.com", password=TEST_PASSWORD, now=clock.now_utc())
    assert revoke_session(raw_token, now=clock.now_utc()) is True
    assert revoke_session(raw_token, now=clock.now_utc()) is False
    session.refresh_from_db()
    assert session.status == SessionStatus.REVOKED
    assert DbAuthProvider(clock=clock).resolve_token(raw_token) is None


def test_deactivated_user_sessions_stop_resolving(captain_user, clock):
    raw_token, _, _ = login(email="captain@example.com", password=TEST_PASSWORD, now=clock.now_utc())
    captain_user.is_active = False
    captain_user.save()
    assert DbAuthProvider(clock=clock).resolve_token(raw_token) is None


def test_header_resolution(admin_user, clock):
    raw_token, _, _ = login(email="admin@example.com", password=TEST_PASSWORD, now=clock.now_utc())
    provider = DbAuthProvider(clock=clock)

    actor = resolve_actor_context({"Authorization": f"Bearer {raw_token}"}, provider)
    assert actor.user_id == str(admin_user.id)
    actor = resolve_actor_context({"X-SESSION-TOKEN": raw_token}, provider)
    assert actor.is_admin

    missing = resolve_actor_context({}, provider)
    assert isinstance(missing, RejectionReason)
    assert missing.code == "UNAUTHORIZED"
    assert SessionToken.objects.count() == 1
