"""Metrics-derivation engine.

Pure functions over a TrackerData snapshot; nothing here performs I/O or
mutates its input.
"""

from tradetracker.engine.analytics import max_drawdown, performance_stats, streaks
from tradetracker.engine.cashflow import cashflows_for_date, net_cashflow_for_date
from tradetracker.engine.daily import build_metrics, classify_status, equity_curve
from tradetracker.engine.summary import build_summary, build_target_panel
from tradetracker.engine.view import STATUS_FILTERS, TrackerView, derive, filter_metrics
from tradetracker.engine.withdrawal import (
    current_equity,
    high_water_mark,
    suggest_withdrawal,
)

__all__ = [
    "max_drawdown",
    "performance_stats",
    "streaks",
    "cashflows_for_date",
    "net_cashflow_for_date",
    "build_metrics",
    "classify_status",
    "equity_curve",
    "build_summary",
    "build_target_panel",
    "STATUS_FILTERS",
    "TrackerView",
    "derive",
    "filter_metrics",
    "current_equity",
    "high_water_mark",
    "suggest_withdrawal",
]
