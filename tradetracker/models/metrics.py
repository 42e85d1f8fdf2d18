"""Derived records produced by the metrics engine.

None of these are persisted; they are recomputed from a TrackerData
snapshot on every read.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from tradetracker.models.day import DayEntry
from tradetracker.models.settings import WithdrawalRule

DayStatus = Literal["goal", "green", "neutral", "red", "pending"]

DAY_STATUSES: tuple[str, ...] = ("goal", "green", "neutral", "red", "pending")


class DayMetrics(BaseModel):
    """Metrics of one trading day."""

    entry: DayEntry
    day_index: int = Field(..., ge=1, description="1-based position in the sequence")
    target_start: float = Field(..., description="Compounding base at day start")
    target_end: float = Field(..., description="Target equity at day end")
    target_gain: float = Field(..., description="target_end - target_start")
    net_cashflow: float = Field(..., description="Same-date deposits minus withdrawals")
    trading_change: Optional[float] = Field(
        default=None, description="Cashflow-adjusted trading P&L (None when pending)"
    )
    trading_pct: Optional[float] = Field(
        default=None, description="trading_change as percent of target_start"
    )
    status: DayStatus
    equity_value: float = Field(..., description="Point plotted on the equity curve")

    model_config = {"frozen": True}


class PerformanceStats(BaseModel):
    """Win/loss statistics over the settled days."""

    completed_days: int = 0
    green_days: int = 0
    red_days: int = 0
    win_rate: float = 0.0
    avg_green: float = 0.0
    avg_red: float = 0.0
    total_gains: float = 0.0
    total_losses: float = 0.0
    profit_factor: float = 0.0

    model_config = {"frozen": True}


class Streaks(BaseModel):
    """Trailing run lengths counted back from the most recent day."""

    goal_streak: int = 0
    green_streak: int = 0

    model_config = {"frozen": True}


class WithdrawalSuggestion(BaseModel):
    """Advisory payout under the configured policy."""

    rule: WithdrawalRule = "profit_start"
    equity: float = 0.0
    high_water_mark: float = 0.0
    threshold: float = 0.0
    base: float = 0.0
    rate: float = 0.0
    amount: float = 0.0

    model_config = {"frozen": True}


class Summary(BaseModel):
    """Headline figures of the account."""

    current_equity: float = 0.0
    target_end: float = 0.0
    daily_target_pct: float = 0.0
    max_drawdown: float = 0.0

    model_config = {"frozen": True}


class TargetPanel(BaseModel):
    """Target figures of the current trading day."""

    day_number: int = 0
    target_start: float = 0.0
    target_end: float = 0.0
    target_gain: float = 0.0

    model_config = {"frozen": True}
