"""Report commands for Trade Tracker CLI.

Handles the summary, performance statistics and the withdrawal suggestion.
"""

import math
from typing import Optional

import click
from rich.panel import Panel

from tradetracker.cli.common import (
    console,
    fail,
    format_currency,
    format_percent,
    get_tracker,
    parse_number,
    require_setup_panel,
)
from tradetracker.exceptions import TrackerError
from tradetracker.models import WITHDRAWAL_RULES

RULE_DESCRIPTIONS = {
    "profit_start": "profit above starting capital",
    "profit_hwm": "profit above high-water mark less buffer",
    "goal_only": "equity above target goal",
}


def format_profit_factor(value: float) -> str:
    """Profit factor with two decimals, ``Infinity`` when there were no losses."""
    return f"{value:.2f}" if math.isfinite(value) else "Infinity"


@click.command()
def summary() -> None:
    """Display equity, today's target and max drawdown.

    \b
    Examples:
      tradetracker summary
    """
    view = get_tracker().view()
    if view.data.settings is None:
        console.print(require_setup_panel())

    s = view.summary
    panel = view.target_panel

    console.print(Panel(
        f"Current Equity: [bold]{format_currency(s.current_equity)}[/bold]\n"
        f"Target End:     {format_currency(s.target_end)}\n"
        f"Daily Target:   {format_percent(s.daily_target_pct)}\n"
        f"Max Drawdown:   [red]{format_percent(s.max_drawdown)}[/red]",
        title="[bold cyan]Summary[/bold cyan]",
        border_style="cyan",
    ))

    console.print(Panel(
        f"[bold]Day {panel.day_number}[/bold]\n\n"
        f"Target Start: {format_currency(panel.target_start)}\n"
        f"Target End:   {format_currency(panel.target_end)}\n"
        f"Target Gain:  [green]{format_currency(panel.target_gain)}[/green]",
        title="[bold cyan]Today's Target[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
def stats() -> None:
    """Display win rate, average day, profit factor and streaks.

    \b
    Examples:
      tradetracker stats
    """
    view = get_tracker().view()
    st = view.stats
    streaks = view.streaks

    if st.completed_days == 0:
        console.print(Panel(
            "[dim]No completed trading days yet[/dim]",
            title="[bold]Performance[/bold]",
            border_style="dim",
        ))
        return

    console.print(Panel(
        f"Win Rate:      {format_percent(st.win_rate)} "
        f"[dim]({st.green_days}W / {st.red_days}L of {st.completed_days})[/dim]\n"
        f"Avg Green Day: [green]{format_percent(st.avg_green)}[/green]\n"
        f"Avg Red Day:   [red]{format_percent(st.avg_red)}[/red]\n"
        f"Profit Factor: {format_profit_factor(st.profit_factor)}\n"
        f"{'─' * 30}\n"
        f"Goal Streak:   {streaks.goal_streak}\n"
        f"Green Streak:  {streaks.green_streak}",
        title="[bold cyan]Performance[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.option(
    "--rule",
    type=click.Choice(list(WITHDRAWAL_RULES)),
    default=None,
    help="Payout rule.",
)
@click.option("--rate", default=None, help="Payout percentage of the base amount.")
@click.option("--buffer", "buffer", default=None, help="Buffer below high-water mark (profit_hwm).")
def withdraw(rule: Optional[str], rate: Optional[str], buffer: Optional[str]) -> None:
    """Show the suggested withdrawal, optionally changing the policy first.

    \b
    Examples:
      tradetracker withdraw
      tradetracker withdraw --rule profit_hwm --rate 50 --buffer 500
    """
    tracker = get_tracker()
    view = tracker.view()

    if rule is not None or rate is not None or buffer is not None:
        current = view.data.withdrawal
        policy = current.model_copy(update={
            "rule": rule if rule is not None else current.rule,
            "rate": max(0.0, parse_number(rate)) if rate is not None else current.rate,
            "buffer": max(0.0, parse_number(buffer)) if buffer is not None else current.buffer,
        })
        try:
            view = tracker.set_withdrawal_policy(policy)
        except TrackerError as e:
            fail(str(e))

    if view.data.settings is None:
        console.print(require_setup_panel())
        return

    w = view.withdrawal
    policy = view.data.withdrawal
    lines = [
        f"Rule:            [bold]{w.rule}[/bold] [dim]({RULE_DESCRIPTIONS[w.rule]})[/dim]",
        f"Current Equity:  {format_currency(w.equity)}",
        f"High-Water Mark: {format_currency(w.high_water_mark)}",
    ]
    if w.rule == "profit_hwm":
        lines.append(f"Buffer:          {format_currency(policy.buffer)}")
    lines += [
        f"Threshold:       {format_currency(w.threshold)}",
        f"Base:            {format_currency(w.base)}",
        f"Rate:            {format_percent(w.rate)}",
        f"{'─' * 30}",
        f"[bold]Suggested:       [green]{format_currency(w.amount)}[/green][/bold]",
    ]

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Withdrawal[/bold cyan]",
        border_style="cyan",
    ))
