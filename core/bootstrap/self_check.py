"""
ERP Bootstrap — Self-Check Orchestrator
=======================================
Check order:
1. Database reachable
2. Schema migrated
3. Admin account (warning only)
"""

import logging

from core.bootstrap.invariants import (
    check_admin_present,
    check_database_reachable,
    check_schema_tables,
)

logger = logging.getLogger("erp.bootstrap")


def run_bootstrap_checks():
    """
    Called once at startup via AppConfig.ready(). A failing check raises
    SystemBootstrapError and prevents startup.
    """
    logger.info("═══ ERP Bootstrap Self-Check Starting ═══")

    check_database_reachable()
    check_schema_tables()
    check_admin_present()

    logger.info("═══ ERP Bootstrap Self-Check PASSED ═══")
