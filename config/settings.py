"""
ERP – Django Settings
=====================
Django is the framework container for the ERP backend.
Every deployment-specific value comes from the environment; see
core.config.environment for the parsing rules.

Required:
    ERP_DATABASE_URL     sqlite:///erp.sqlite3 | postgres://user@host:5432/erp
Optional:
    ERP_DATABASE_TOKEN   credential for remote databases
    ERP_SECRET_KEY       mandatory when ERP_DEBUG is off
    ERP_DEBUG, ERP_ALLOWED_HOSTS, ERP_SESSION_TTL_HOURS, ERP_LOG_LEVEL
"""

import os
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

from core.config.environment import (
    database_settings_from_env,
    env_flag,
    env_int,
    env_list,
)

# ── Paths ─────────────────────────────────────────────────────
# BASE_DIR = project root where manage.py lives
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
DEBUG = env_flag(os.environ, "ERP_DEBUG", default=False)

SECRET_KEY = os.environ.get("ERP_SECRET_KEY", "")
if not SECRET_KEY:
    if not DEBUG:
        raise ImproperlyConfigured("ERP_SECRET_KEY must be set when ERP_DEBUG is off.")
    SECRET_KEY = "erp-dev-key-not-for-deployment"

ALLOWED_HOSTS = env_list(os.environ, "ERP_ALLOWED_HOSTS")

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # ── Core ──────────────────────────────────────────────
    "core.identity",
    "core.auth",
    "core.documents",
    "core.bootstrap",
    # ── Engines (dependency order) ────────────────────────
    "engines.stores",
    "engines.catalog",
    "engines.orders",
    "engines.invoicing",
    "engines.payments",
    "engines.inventory",
    "engines.procurement",
    "engines.production",
]

# ── Middleware ────────────────────────────────────────────────
# JSON API only: no sessions, no CSRF cookies, no templates.
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
DATABASES = {
    "default": database_settings_from_env(os.environ),
}

# ── Auth ──────────────────────────────────────────────────────
ERP_SESSION_TTL_HOURS = env_int(os.environ, "ERP_SESSION_TTL_HOURS", default=12)

# ── Logging ───────────────────────────────────────────────────
ERP_LOG_LEVEL = os.environ.get("ERP_LOG_LEVEL", "INFO").strip().upper() or "INFO"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "erp": {
            "handlers": ["console"],
            "level": ERP_LOG_LEVEL,
            "propagate": False,
        },
    },
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
# ERP models use UUIDs explicitly. This is a Django fallback only.
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
