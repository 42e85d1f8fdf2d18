"""Summary and target-panel figures."""

from tradetracker.engine.analytics import max_drawdown
from tradetracker.engine.daily import equity_curve
from tradetracker.engine.withdrawal import current_equity
from tradetracker.models import DayMetrics, Summary, TargetPanel, TrackerData


def build_summary(data: TrackerData, metrics: list[DayMetrics]) -> Summary:
    """Reduce the metrics sequence to the headline account figures.

    Args:
        data: Snapshot the metrics were built from.
        metrics: Metrics sequence from build_metrics.

    Returns:
        Summary; all zeros when the tracker has no settings.
    """
    settings = data.settings
    if settings is None:
        return Summary()

    if metrics:
        target_end = metrics[-1].target_end
    else:
        target_end = settings.starting_capital * (1 + settings.daily_target_pct / 100)

    return Summary(
        current_equity=current_equity(settings, metrics),
        target_end=target_end,
        daily_target_pct=settings.daily_target_pct,
        max_drawdown=max_drawdown(equity_curve(settings, metrics)),
    )


def build_target_panel(data: TrackerData, metrics: list[DayMetrics]) -> TargetPanel:
    """Target figures for the current day, or for day 1 before any day exists."""
    settings = data.settings
    if settings is None:
        return TargetPanel()

    if not metrics:
        target_start = settings.starting_capital
        target_end = target_start * (1 + settings.daily_target_pct / 100)
        return TargetPanel(
            day_number=1,
            target_start=target_start,
            target_end=target_end,
            target_gain=target_end - target_start,
        )

    current = metrics[-1]
    return TargetPanel(
        day_number=len(metrics),
        target_start=current.target_start,
        target_end=current.target_end,
        target_gain=current.target_gain,
    )
