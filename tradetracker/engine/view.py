"""One full derivation pass over a snapshot."""

from dataclasses import dataclass

from tradetracker.engine.analytics import performance_stats, streaks
from tradetracker.engine.daily import build_metrics
from tradetracker.engine.summary import build_summary, build_target_panel
from tradetracker.engine.withdrawal import suggest_withdrawal
from tradetracker.models import (
    DayMetrics,
    PerformanceStats,
    Streaks,
    Summary,
    TargetPanel,
    TrackerData,
    WithdrawalSuggestion,
)

STATUS_FILTERS: tuple[str, ...] = ("all", "goal", "green", "neutral", "red", "pending")


@dataclass(frozen=True)
class TrackerView:
    """Everything the presentation layer renders for one snapshot."""

    data: TrackerData
    metrics: list[DayMetrics]
    summary: Summary
    target_panel: TargetPanel
    stats: PerformanceStats
    streaks: Streaks
    withdrawal: WithdrawalSuggestion

    @property
    def current(self) -> DayMetrics | None:
        """Metrics of the last day in the sequence."""
        return self.metrics[-1] if self.metrics else None


def derive(data: TrackerData) -> TrackerView:
    """Build metrics and every figure derived from them."""
    metrics = build_metrics(data)
    return TrackerView(
        data=data,
        metrics=metrics,
        summary=build_summary(data, metrics),
        target_panel=build_target_panel(data, metrics),
        stats=performance_stats(metrics),
        streaks=streaks(metrics),
        withdrawal=suggest_withdrawal(data.settings, metrics, data.withdrawal),
    )


def filter_metrics(metrics: list[DayMetrics], status_filter: str = "all") -> list[DayMetrics]:
    """Filter the metrics sequence by status.

    Args:
        metrics: Metrics sequence.
        status_filter: "all" or one of the day statuses.

    Returns:
        Matching metrics in sequence order.
    """
    if status_filter not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status_filter}")
    if status_filter == "all":
        return list(metrics)
    return [metric for metric in metrics if metric.status == status_filter]
