"""
ERP Admin — Dashboard Aggregation
=================================
Read-only counters over orders, invoices and raw materials.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.db.models import Count, Sum

from core.primitives import ZERO, money_str
from engines.inventory.services import low_stock_queryset
from engines.invoicing.models import Invoice
from engines.orders.models import Order, OrderStatus


@dataclass(frozen=True)
class InvoiceTotals:
    invoiced: Decimal
    collected: Decimal
    outstanding: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    order_counts: dict[str, int]
    invoice_totals: InvoiceTotals
    low_stock_count: int


def build_dashboard_summary() -> DashboardSummary:
    order_counts = {status: 0 for status in OrderStatus.values}
    for row in Order.objects.values("status").annotate(count=Count("id")):
        order_counts[row["status"]] = row["count"]

    sums = Invoice.objects.aggregate(
        invoiced=Sum("total_amount"),
        collected=Sum("paid_amount"),
        outstanding=Sum("balance_amount"),
    )
    totals = InvoiceTotals(
        invoiced=sums["invoiced"] or ZERO,
        collected=sums["collected"] or ZERO,
        outstanding=sums["outstanding"] or ZERO,
    )
    return DashboardSummary(
        order_counts=order_counts,
        invoice_totals=totals,
        low_stock_count=low_stock_queryset().count(),
    )


def serialize_dashboard_summary(summary: DashboardSummary) -> dict[str, Any]:
    return {
        "order_counts": dict(summary.order_counts),
        "invoice_totals": {
            "invoiced": money_str(summary.invoice_totals.invoiced),
            "collected": money_str(summary.invoice_totals.collected),
            "outstanding": money_str(summary.invoice_totals.outstanding),
        },
        "low_stock_count": summary.low_stock_count,
    }
