"""Drawdown, win/loss statistics and streaks over the metrics sequence."""

import math

from tradetracker.models import DayMetrics, PerformanceStats, Streaks


def max_drawdown(values: list[float]) -> float:
    """Calculate the largest peak-to-trough decline of an equity curve.

    Args:
        values: Equity values in time order.

    Returns:
        Maximum drawdown in percent; 0.0 for an empty or rising curve.
    """
    if not values:
        return 0.0

    peak = values[0]
    worst = 0.0
    for value in values:
        if value > peak:
            peak = value
        drawdown = (peak - value) / peak if peak > 0 else 0.0
        if drawdown > worst:
            worst = drawdown

    return worst * 100


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def performance_stats(metrics: list[DayMetrics]) -> PerformanceStats:
    """Calculate win rate, average day sizes and profit factor.

    Pending days are ignored. Goal days count as green; days with a zero
    change count as completed but neither green nor red.

    Args:
        metrics: Metrics sequence from build_metrics.

    Returns:
        PerformanceStats, profit_factor is math.inf when there are gains
        and no losses.
    """
    completed = [metric for metric in metrics if metric.trading_change is not None]
    greens = [metric for metric in completed if metric.trading_change > 0]
    reds = [metric for metric in completed if metric.trading_change < 0]

    total_gains = sum((metric.trading_change for metric in greens), 0.0)
    total_losses = sum((abs(metric.trading_change) for metric in reds), 0.0)

    if total_losses > 0:
        profit_factor = total_gains / total_losses
    elif total_gains > 0:
        profit_factor = math.inf
    else:
        profit_factor = 0.0

    return PerformanceStats(
        completed_days=len(completed),
        green_days=len(greens),
        red_days=len(reds),
        win_rate=len(greens) / len(completed) * 100 if completed else 0.0,
        avg_green=_mean([metric.trading_pct or 0.0 for metric in greens]),
        avg_red=_mean([metric.trading_pct or 0.0 for metric in reds]),
        total_gains=total_gains,
        total_losses=total_losses,
        profit_factor=profit_factor,
    )


def _trailing_count(metrics: list[DayMetrics], statuses: set[str]) -> int:
    count = 0
    for metric in reversed(metrics):
        if metric.status not in statuses:
            break
        count += 1
    return count


def streaks(metrics: list[DayMetrics]) -> Streaks:
    """Count the goal and green runs ending at the most recent day."""
    return Streaks(
        goal_streak=_trailing_count(metrics, {"goal"}),
        green_streak=_trailing_count(metrics, {"goal", "green"}),
    )
