"""
ERP Bootstrap — Startup Checks
==============================
Each function verifies one precondition and raises SystemBootstrapError
when it does not hold.

These checks never run migrations or create tables.
"""

import logging

from django.apps import apps
from django.db import DatabaseError, connection

from core.bootstrap.errors import SystemBootstrapError

logger = logging.getLogger("erp.bootstrap")

ERP_APP_LABELS = (
    "core_identity",
    "core_auth",
    "core_documents",
    "stores",
    "catalog",
    "orders",
    "invoicing",
    "payments",
    "inventory",
    "procurement",
    "production",
)


# ══════════════════════════════════════════════════════════════
# CHECK 1: Database Reachable
# ══════════════════════════════════════════════════════════════

def check_database_reachable():
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        raise SystemBootstrapError(
            invariant="DATABASE_UNREACHABLE",
            detail=f"Database '{connection.settings_dict.get('NAME')}' is unreachable: {exc}",
        ) from exc

    logger.info(f"✓ Database reachable ({connection.vendor}).")


# ══════════════════════════════════════════════════════════════
# CHECK 2: Schema Migrated
# ══════════════════════════════════════════════════════════════

def required_tables() -> list[str]:
    tables = []
    for label in ERP_APP_LABELS:
        for model in apps.get_app_config(label).get_models():
            tables.append(model._meta.db_table)
    return sorted(tables)


def check_schema_tables():
    existing = set(connection.introspection.table_names())
    missing = [table for table in required_tables() if table not in existing]
    if missing:
        raise SystemBootstrapError(
            invariant="SCHEMA_NOT_MIGRATED",
            detail=(
                f"Missing table(s): {', '.join(missing)}. "
                f"Run 'manage.py migrate' before starting the ERP."
            ),
        )

    logger.info("✓ All ERP tables present.")


# ══════════════════════════════════════════════════════════════
# CHECK 3: Admin Account
# ══════════════════════════════════════════════════════════════

def check_admin_present():
    """Warn only: a fresh deployment seeds its admin after migrating."""
    from core.identity.models import User, UserRole

    if not User.objects.filter(role=UserRole.ADMIN, is_active=True).exists():
        logger.warning(
            "⚠ No active admin user. Run 'manage.py seed_admin' to create one."
        )
        return

    logger.info("✓ Active admin user present.")
