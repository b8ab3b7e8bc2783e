"""
ERP Bootstrap — Startup Self-Check
==================================
Ensures the ERP never serves requests against an unreachable or
unmigrated database.
"""

from core.bootstrap.errors import SystemBootstrapError
from core.bootstrap.self_check import run_bootstrap_checks

__all__ = [
    "SystemBootstrapError",
    "run_bootstrap_checks",
]
