"""
Tests for core.config.environment — database URL and switch parsing.
"""

import pytest
from django.core.exceptions import ImproperlyConfigured

from core.config.environment import (
    database_settings_from_env,
    env_flag,
    env_int,
    env_list,
    parse_database_url,
)


# ── Database URL ─────────────────────────────────────────────

class TestParseDatabaseUrl:
    def test_sqlite_relative(self):
        endpoint = parse_database_url("sqlite:///erp.sqlite3")
        assert endpoint.scheme == "sqlite"
        assert endpoint.name == "erp.sqlite3"
        assert not endpoint.is_remote

    def test_sqlite_absolute(self):
        assert parse_database_url("sqlite:////var/lib/erp.db").name == "/var/lib/erp.db"

    def test_sqlite_memory(self):
        assert parse_database_url("sqlite:///:memory:").name == ":memory:"

    def test_postgres(self):
        endpoint = parse_database_url("postgres://erp@db.internal:5433/erp")
        assert endpoint.is_remote
        assert (endpoint.host, endpoint.port, endpoint.user, endpoint.name) == (
            "db.internal",
            5433,
            "erp",
            "erp",
        )

    @pytest.mark.parametrize(
        "url",
        ["", "mysql://x@h/db", "sqlite://", "postgres://host-only"],
    )
    def test_rejects_bad_urls(self, url):
        with pytest.raises(ImproperlyConfigured):
            parse_database_url(url)


class TestDatabaseSettings:
    def test_missing_url_fails_fast(self):
        with pytest.raises(ImproperlyConfigured, match="ERP_DATABASE_URL"):
            database_settings_from_env({})

    def test_sqlite_settings(self):
        settings = database_settings_from_env({"ERP_DATABASE_URL": "sqlite:///erp.sqlite3"})
        assert settings["ENGINE"] == "django.db.backends.sqlite3"
        assert settings["NAME"] == "erp.sqlite3"

    def test_remote_requires_token(self):
        with pytest.raises(ImproperlyConfigured, match="ERP_DATABASE_TOKEN"):
            database_settings_from_env({"ERP_DATABASE_URL": "postgres://erp@db/erp"})

    def test_remote_uses_token_as_password(self):
        settings = database_settings_from_env(
            {
                "ERP_DATABASE_URL": "postgres://erp@db/erp",
                "ERP_DATABASE_TOKEN": " s3cret ",
            }
        )
        assert settings["ENGINE"] == "django.db.backends.postgresql"
        assert settings["PASSWORD"] == "s3cret"
        assert settings["PORT"] == ""


# ── Switches ─────────────────────────────────────────────────

class TestSwitches:
    @pytest.mark.parametrize("raw,expected", [("1", True), ("TRUE", True), ("off", False), ("", False)])
    def test_env_flag(self, raw, expected):
        assert env_flag({"X": raw}, "X") is expected

    def test_env_flag_default_and_garbage(self):
        assert env_flag({}, "X", default=True) is True
        with pytest.raises(ImproperlyConfigured):
            env_flag({"X": "maybe"}, "X")

    def test_env_int(self):
        assert env_int({"TTL": "24"}, "TTL", default=12) == 24
        assert env_int({}, "TTL", default=12) == 12
        with pytest.raises(ImproperlyConfigured):
            env_int({"TTL": "0"}, "TTL", default=12)
        with pytest.raises(ImproperlyConfigured):
            env_int({"TTL": "a day"}, "TTL", default=12)

    def test_env_list(self):
        assert env_list({"HOSTS": "a.in, b.in,,"}, "HOSTS") == ["a.in", "b.in"]
        assert env_list({}, "HOSTS") == []
