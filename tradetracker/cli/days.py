"""Trading day commands for Trade Tracker CLI.

Handles adding and editing days, the current day card and the history table.
Days are referenced by their day number or by their id; without a reference
the current (last) day is used.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradetracker.cli.common import (
    console,
    fail,
    format_currency,
    format_percent,
    get_tracker,
    parse_optional_number,
    require_setup_panel,
    styled_status,
)
from tradetracker.engine import STATUS_FILTERS, TrackerView, cashflows_for_date, filter_metrics
from tradetracker.exceptions import TrackerError


def resolve_day_id(view: TrackerView, ref: Optional[str]) -> str:
    """Turn a day reference into a day id.

    Args:
        view: Current tracker view.
        ref: Day number (1-based), day id, or None for the current day.

    Returns:
        The day id.

    Raises:
        click.ClickException: If the reference does not match a day.
    """
    days = view.data.days
    if not days:
        raise click.ClickException("No trading days logged yet.")
    if ref is None:
        return days[-1].id
    if ref.isdigit():
        number = int(ref)
        if 1 <= number <= len(days):
            return days[number - 1].id
        raise click.ClickException(f"No day number {number} (have {len(days)}).")
    if view.data.find_day(ref) is None:
        raise click.ClickException(f"No day with id '{ref}'.")
    return ref


def render_day_card(view: TrackerView) -> Panel:
    """Build the panel describing the current day."""
    current = view.current
    if current is None:
        return Panel(
            "[dim]No trading days logged yet.[/dim]\n\n"
            "Run [cyan]tradetracker day add[/cyan] to start one.",
            title="[bold]Current Day[/bold]",
            border_style="dim",
        )

    entry = current.entry
    change = (
        format_currency(current.trading_change) if current.trading_change is not None else "--"
    )
    pct = format_percent(current.trading_pct) if current.trading_pct is not None else "--"
    close = format_currency(entry.actual_close) if entry.actual_close is not None else "--"

    lines = [
        f"[bold]Day {current.day_index}[/bold] [dim]({entry.date or 'No date'})[/dim]  "
        f"{styled_status(current.status, entry)}",
        "",
        f"Actual Close:   {close}",
        f"Target Start:   {format_currency(current.target_start)}",
        f"Target End:     {format_currency(current.target_end)}",
        f"Target Gain:    {format_currency(current.target_gain)}",
        f"Net Cashflow:   {format_currency(current.net_cashflow)}",
        f"Trading Change: {change}",
        f"Trading %:      {pct}",
    ]

    if entry.close_ignored:
        lines.append(
            "\n[yellow]A close is stored but the day is marked No Trade; "
            "the close is ignored.[/yellow]"
        )
    elif entry.no_trade:
        lines.append(
            f"\n[dim]Suggested close: {format_currency(current.target_start + current.net_cashflow)}[/dim]"
        )

    flows = cashflows_for_date(view.data.cashflows, entry.date)
    if flows:
        lines.append("\n[bold]Cashflows:[/bold]")
        for flow in flows:
            sign = "+" if flow.type == "deposit" else "-"
            color = "green" if flow.type == "deposit" else "red"
            lines.append(
                f"  [{color}]{sign}{format_currency(flow.amount)}[/{color}] {flow.note or ''}".rstrip()
            )

    return Panel("\n".join(lines), title="[bold cyan]Current Day[/bold cyan]", border_style="cyan")


def _apply(action, *args, **kwargs) -> TrackerView:
    try:
        return action(*args, **kwargs)
    except TrackerError as e:
        fail(str(e))


@click.group()
def day() -> None:
    """Add and edit trading days.

    \b
    Examples:
      tradetracker day add                   # New day (date picked for you)
      tradetracker day close 10120           # Close of the current day
      tradetracker day close 9980 --day 3    # Close of day 3
      tradetracker day no-trade              # Mark current day as not traded
      tradetracker day show                  # Current day card
    """
    pass


@day.command("add")
@click.option("--date", "day_date", default=None, help="Date of the day (YYYY-MM-DD).")
def add_day(day_date: Optional[str]) -> None:
    """Append a new pending trading day."""
    tracker = get_tracker()
    if tracker.snapshot().settings is None:
        console.print(require_setup_panel())
        raise SystemExit(1)

    view = _apply(tracker.add_day, day_date)
    current = view.current
    console.print(
        f"[green]✓ Added day {current.day_index} ({current.entry.date or 'No date'})[/green]"
    )
    console.print(render_day_card(view))


@day.command("close")
@click.argument("value")
@click.option("--day", "day_ref", default=None, help="Day number or id (default: current day).")
def close_day(value: str, day_ref: Optional[str]) -> None:
    """Record the account close of a day.

    VALUE is the closing equity. A value that is not a number (e.g. "none")
    clears the close and makes the day pending again.
    """
    tracker = get_tracker()
    view = tracker.view()
    try:
        day_id = resolve_day_id(view, day_ref)
    except click.ClickException as e:
        fail(e.message)

    view = _apply(tracker.update_day, day_id, actual_close=parse_optional_number(value))
    console.print(render_day_card(view) if view.current.entry.id == day_id else _day_line(view, day_id))


@day.command("no-trade")
@click.option("--off", is_flag=True, default=False, help="Unset the no-trade flag.")
@click.option("--day", "day_ref", default=None, help="Day number or id (default: current day).")
def no_trade(off: bool, day_ref: Optional[str]) -> None:
    """Mark a day as intentionally not traded."""
    tracker = get_tracker()
    view = tracker.view()
    try:
        day_id = resolve_day_id(view, day_ref)
    except click.ClickException as e:
        fail(e.message)

    view = _apply(tracker.update_day, day_id, no_trade=not off)
    console.print(_day_line(view, day_id))


@day.command("date")
@click.argument("new_date")
@click.option("--day", "day_ref", default=None, help="Day number or id (default: current day).")
def set_date(new_date: str, day_ref: Optional[str]) -> None:
    """Change the calendar date of a day."""
    tracker = get_tracker()
    view = tracker.view()
    try:
        day_id = resolve_day_id(view, day_ref)
    except click.ClickException as e:
        fail(e.message)

    view = _apply(tracker.update_day, day_id, date=new_date.strip())
    console.print(_day_line(view, day_id))


@day.command("remove")
@click.option("--day", "day_ref", default=None, help="Day number or id (default: current day).")
def remove_day(day_ref: Optional[str]) -> None:
    """Delete a day."""
    tracker = get_tracker()
    view = tracker.view()
    try:
        day_id = resolve_day_id(view, day_ref)
    except click.ClickException as e:
        fail(e.message)

    _apply(tracker.remove_day, day_id)
    console.print("[green]✓ Day removed[/green]")


@day.command("current")
@click.argument("day_ref")
def make_current(day_ref: str) -> None:
    """Move a day to the end of the sequence so it becomes the current day.

    Use this to attach cashflows to an earlier day.
    """
    tracker = get_tracker()
    view = tracker.view()
    try:
        day_id = resolve_day_id(view, day_ref)
    except click.ClickException as e:
        fail(e.message)

    console.print(render_day_card(_apply(tracker.make_current, day_id)))


@day.command("show")
def show_day() -> None:
    """Show the current day card."""
    view = get_tracker().view()
    if view.data.settings is None:
        console.print(require_setup_panel())
        return
    console.print(render_day_card(view))


def _day_line(view: TrackerView, day_id: str) -> str:
    for metric in view.metrics:
        if metric.entry.id == day_id:
            return (
                f"Day {metric.day_index} ({metric.entry.date or 'No date'}): "
                f"{styled_status(metric.status, metric.entry)}"
            )
    return "[dim]Day not found[/dim]"


@click.command()
@click.option(
    "--filter",
    "status_filter",
    type=click.Choice(list(STATUS_FILTERS)),
    default="all",
    help="Only show days with this status.",
)
def history(status_filter: str) -> None:
    """Display all trading days with targets and results.

    \b
    Examples:
      tradetracker history
      tradetracker history --filter red
    """
    view = get_tracker().view()
    if view.data.settings is None:
        console.print(require_setup_panel())
        return

    metrics = filter_metrics(view.metrics, status_filter)
    if not metrics:
        console.print(Panel(
            "[dim]No trading days found[/dim]",
            title="[bold]History[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trading History",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Day", justify="right", style="bold")
    table.add_column("Date")
    table.add_column("Target Start", justify="right")
    table.add_column("Target End", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Trading %", justify="right")
    table.add_column("Status", justify="center")

    for metric in metrics:
        entry = metric.entry
        if metric.trading_pct is None:
            pct = "--"
        else:
            color = "green" if metric.trading_pct > 0 else "red" if metric.trading_pct < 0 else "yellow"
            pct = f"[{color}]{format_percent(metric.trading_pct)}[/{color}]"

        table.add_row(
            str(metric.day_index),
            entry.date or "-",
            format_currency(metric.target_start),
            format_currency(metric.target_end),
            format_currency(entry.actual_close) if entry.actual_close is not None else "-",
            pct,
            styled_status(metric.status, entry),
        )

    console.print(table)
