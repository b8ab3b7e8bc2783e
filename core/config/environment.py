"""
ERP Core Config — Environment
=============================
Reads the database endpoint, credential token and runtime switches
from the process environment.

Rules:
- ERP_DATABASE_URL is mandatory. There is no silent fallback database.
- Remote endpoints require ERP_DATABASE_TOKEN.
- Misconfiguration raises ImproperlyConfigured before Django finishes loading.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import unquote, urlparse

from django.core.exceptions import ImproperlyConfigured

ENV_DATABASE_URL = "ERP_DATABASE_URL"
ENV_DATABASE_TOKEN = "ERP_DATABASE_TOKEN"

SCHEME_SQLITE = "sqlite"
SCHEME_POSTGRES = ("postgres", "postgresql")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class DatabaseEndpoint:
    scheme: str
    name: str
    host: str = ""
    port: Optional[int] = None
    user: str = ""

    @property
    def is_remote(self) -> bool:
        return self.scheme != SCHEME_SQLITE


def parse_database_url(url: str) -> DatabaseEndpoint:
    """
    Parse ERP_DATABASE_URL.

    Accepted forms:
        sqlite:///relative/path.sqlite3
        sqlite:////absolute/path.sqlite3
        sqlite:///:memory:
        postgres://user@host:5432/dbname
    """
    if not isinstance(url, str) or not url.strip():
        raise ImproperlyConfigured(f"{ENV_DATABASE_URL} must be a non-empty URL.")

    parsed = urlparse(url.strip())
    scheme = parsed.scheme.lower()

    if scheme == SCHEME_SQLITE:
        # sqlite:///relative.db and sqlite:////absolute/path.db
        name = unquote(parsed.path)[1:]
        if not name:
            raise ImproperlyConfigured(
                f"{ENV_DATABASE_URL} sqlite URL must include a file path."
            )
        return DatabaseEndpoint(scheme=SCHEME_SQLITE, name=name)

    if scheme in SCHEME_POSTGRES:
        name = parsed.path.lstrip("/")
        if not parsed.hostname or not name:
            raise ImproperlyConfigured(
                f"{ENV_DATABASE_URL} postgres URL must include host and database name."
            )
        return DatabaseEndpoint(
            scheme="postgres",
            name=unquote(name),
            host=parsed.hostname,
            port=parsed.port,
            user=unquote(parsed.username or ""),
        )

    raise ImproperlyConfigured(
        f"Unsupported database scheme '{parsed.scheme}' in {ENV_DATABASE_URL}. "
        f"Use sqlite:// or postgres://."
    )


def database_settings_from_env(environ: Mapping[str, str]) -> dict[str, Any]:
    """Build Django's DATABASES['default'] entry from the environment."""
    url = environ.get(ENV_DATABASE_URL)
    if url is None:
        raise ImproperlyConfigured(
            f"{ENV_DATABASE_URL} is not set. Refusing to start without a database."
        )
    endpoint = parse_database_url(url)

    if not endpoint.is_remote:
        return {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": endpoint.name,
            "ATOMIC_REQUESTS": False,
        }

    token = environ.get(ENV_DATABASE_TOKEN, "").strip()
    if not token:
        raise ImproperlyConfigured(
            f"{ENV_DATABASE_TOKEN} is required for remote database '{endpoint.host}'."
        )
    return {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": endpoint.name,
        "HOST": endpoint.host,
        "PORT": "" if endpoint.port is None else str(endpoint.port),
        "USER": endpoint.user,
        "PASSWORD": token,
        "ATOMIC_REQUESTS": False,
    }


def env_flag(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ImproperlyConfigured(f"{name} must be a boolean flag, got '{raw}'.")


def env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ImproperlyConfigured(f"{name} must be an integer, got '{raw}'.") from exc
    if value < 1:
        raise ImproperlyConfigured(f"{name} must be >= 1.")
    return value


def env_list(environ: Mapping[str, str], name: str) -> list[str]:
    raw = environ.get(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]
