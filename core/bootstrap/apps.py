"""
ERP Bootstrap — App Configuration
=================================
Runs the startup self-check (database, schema, admin account) once Django
has loaded every ERP app. A web process that fails a check does not start.

Commands that create or inspect the schema, or seed the first admin,
run before the checks could pass and are exempt.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger("erp.bootstrap")

SCHEMA_COMMANDS = frozenset(
    {
        "migrate",
        "makemigrations",
        "showmigrations",
        "sqlmigrate",
        "seed_admin",
        "check",
    }
)


def _running_schema_command() -> bool:
    return len(sys.argv) >= 2 and sys.argv[1] in SCHEMA_COMMANDS


def _running_under_pytest() -> bool:
    # Tests build their own database after app loading.
    return "PYTEST_CURRENT_TEST" in os.environ or "pytest" in sys.modules


class BootstrapConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.bootstrap"
    label = "bootstrap"
    verbose_name = "ERP Startup Checks"

    def ready(self):
        if _running_schema_command():
            logger.info(f"Startup checks skipped for 'manage.py {sys.argv[1]}'.")
            return
        if _running_under_pytest():
            return

        from core.bootstrap.self_check import run_bootstrap_checks
        run_bootstrap_checks()
