"""
ERP Admin - Public API
======================
"""

from core.admin.commands import RESET_CONFIRMATION, MasterResetRequest
from core.admin.dashboard import (
    DashboardSummary,
    InvoiceTotals,
    build_dashboard_summary,
    serialize_dashboard_summary,
)
from core.admin.service import MasterResetResult, master_reset

__all__ = [
    "DashboardSummary",
    "InvoiceTotals",
    "MasterResetRequest",
    "MasterResetResult",
    "RESET_CONFIRMATION",
    "build_dashboard_summary",
    "master_reset",
    "serialize_dashboard_summary",
]
