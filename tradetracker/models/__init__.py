"""Data models for Trade Tracker."""

from tradetracker.models.cashflow import Cashflow, CashflowType
from tradetracker.models.day import DayEntry
from tradetracker.models.metrics import (
    DAY_STATUSES,
    DayMetrics,
    DayStatus,
    PerformanceStats,
    Streaks,
    Summary,
    TargetPanel,
    WithdrawalSuggestion,
)
from tradetracker.models.settings import (
    WITHDRAWAL_RULES,
    Settings,
    WithdrawalRule,
    WithdrawalSettings,
)
from tradetracker.models.tracker_data import TrackerData

__all__ = [
    "Cashflow",
    "CashflowType",
    "DayEntry",
    "DAY_STATUSES",
    "DayMetrics",
    "DayStatus",
    "PerformanceStats",
    "Streaks",
    "Summary",
    "TargetPanel",
    "WithdrawalSuggestion",
    "WITHDRAWAL_RULES",
    "Settings",
    "WithdrawalRule",
    "WithdrawalSettings",
    "TrackerData",
]
