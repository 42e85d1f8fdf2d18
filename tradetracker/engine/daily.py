"""Per-day metrics derived from the ordered day entries.

The day list is folded front to back with a running compounding base.
Every call recomputes the whole sequence, so an edit to any past day or
cashflow moves through all later days.
"""

from typing import Optional

from tradetracker.engine.cashflow import net_cashflow_for_date
from tradetracker.models import DayEntry, DayMetrics, DayStatus, Settings, TrackerData


def classify_status(trading_change: float, target_gain: float) -> DayStatus:
    """Classify a settled trading day against its target gain.

    Args:
        trading_change: Cashflow-adjusted P&L of the day.
        target_gain: Gain the daily target asked for.

    Returns:
        "goal", "green", "neutral" or "red".
    """
    if trading_change >= target_gain:
        return "goal"
    if trading_change > 0:
        return "green"
    if trading_change == 0:
        return "neutral"
    return "red"


def _trading_result(
    entry: DayEntry, target_start: float, target_gain: float, net_cashflow: float
) -> tuple[Optional[float], Optional[float], DayStatus]:
    # no_trade wins over a stored close
    if entry.no_trade:
        return 0.0, 0.0, "neutral"
    if entry.actual_close is None:
        return None, None, "pending"

    trading_change = entry.actual_close - target_start - net_cashflow
    trading_pct = trading_change / target_start * 100 if target_start > 0 else 0.0
    return trading_change, trading_pct, classify_status(trading_change, target_gain)


def _realized_value(entry: DayEntry, target_start: float, net_cashflow: float) -> float:
    """Equity a day settles at; a pending day leaves the base untouched."""
    if entry.no_trade:
        return target_start + net_cashflow
    if entry.actual_close is not None:
        return entry.actual_close
    return target_start


def build_metrics(data: TrackerData) -> list[DayMetrics]:
    """Build one DayMetrics record per day entry.

    Args:
        data: Snapshot to derive from.

    Returns:
        Metrics in day-list order, empty when the tracker has no settings.
    """
    if data.settings is None:
        return []

    growth = 1 + data.settings.daily_target_pct / 100
    running_start = data.settings.starting_capital
    metrics: list[DayMetrics] = []

    for index, entry in enumerate(data.days):
        target_start = running_start
        target_end = target_start * growth
        target_gain = target_end - target_start
        net_cashflow = net_cashflow_for_date(data.cashflows, entry.date)

        trading_change, trading_pct, status = _trading_result(
            entry, target_start, target_gain, net_cashflow
        )
        equity_value = _realized_value(entry, target_start, net_cashflow)
        running_start = equity_value

        metrics.append(
            DayMetrics(
                entry=entry,
                day_index=index + 1,
                target_start=target_start,
                target_end=target_end,
                target_gain=target_gain,
                net_cashflow=net_cashflow,
                trading_change=trading_change,
                trading_pct=trading_pct,
                status=status,
                equity_value=equity_value,
            )
        )

    return metrics


def equity_curve(settings: Optional[Settings], metrics: list[DayMetrics]) -> list[float]:
    """Equity values anchored at the starting capital as day 0."""
    if settings is None:
        return []
    return [settings.starting_capital] + [metric.equity_value for metric in metrics]
