"""Suggested withdrawal under the three payout rules."""

from typing import Optional

from tradetracker.models import (
    DayMetrics,
    Settings,
    WithdrawalSettings,
    WithdrawalSuggestion,
)


def current_equity(settings: Settings, metrics: list[DayMetrics]) -> float:
    """Latest reported close, or the starting capital when nothing is reported."""
    for metric in reversed(metrics):
        close = metric.entry.reported_close
        if close is not None:
            return close
    return settings.starting_capital


def high_water_mark(settings: Settings, metrics: list[DayMetrics]) -> float:
    """Highest reported close, never below the starting capital."""
    closes = [
        metric.entry.reported_close
        for metric in metrics
        if metric.entry.reported_close is not None
    ]
    return max([settings.starting_capital] + closes)


def suggest_withdrawal(
    settings: Optional[Settings],
    metrics: list[DayMetrics],
    policy: WithdrawalSettings,
) -> WithdrawalSuggestion:
    """Calculate the advisory withdrawal amount.

    Rules:
        profit_start: profit above the starting capital.
        profit_hwm: profit above the high-water mark less the buffer,
            never measured below the starting capital.
        goal_only: equity above the target goal.

    Args:
        settings: Account settings, None when not configured.
        metrics: Metrics sequence from build_metrics.
        policy: Withdrawal policy.

    Returns:
        WithdrawalSuggestion with amount = base * rate / 100.
    """
    if settings is None:
        return WithdrawalSuggestion(rule=policy.rule, rate=policy.rate)

    equity = current_equity(settings, metrics)
    hwm = high_water_mark(settings, metrics)

    if policy.rule == "profit_start":
        threshold = settings.starting_capital
    elif policy.rule == "profit_hwm":
        threshold = max(settings.starting_capital, hwm - policy.buffer)
    elif policy.rule == "goal_only":
        threshold = settings.target_goal
    else:
        raise ValueError(f"Unknown withdrawal rule: {policy.rule}")

    base = max(0.0, equity - threshold)
    return WithdrawalSuggestion(
        rule=policy.rule,
        equity=equity,
        high_water_mark=hwm,
        threshold=threshold,
        base=base,
        rate=policy.rate,
        amount=base * policy.rate / 100,
    )
