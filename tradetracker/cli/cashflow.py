"""Cashflow commands for Trade Tracker CLI.

Deposits and withdrawals are linked to trading days by date only.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradetracker.cli.common import console, fail, format_currency, get_tracker, parse_number
from tradetracker.exceptions import TrackerError


@click.group()
def cashflow() -> None:
    """Record deposits and withdrawals.

    \b
    Examples:
      tradetracker cashflow add --type deposit --amount 500
      tradetracker cashflow add --type withdrawal --amount 200 --date 2024-03-01
      tradetracker cashflow list
      tradetracker cashflow remove 2
    """
    pass


@cashflow.command("add")
@click.option(
    "--type",
    "flow_type",
    type=click.Choice(["deposit", "withdrawal"]),
    default="deposit",
    help="Kind of cashflow.",
)
@click.option("--amount", "amount", required=True, help="Amount (positive).")
@click.option("--note", "note", default=None, help="Short note.")
@click.option("--date", "flow_date", default=None, help="Date (default: current day's date).")
def add_cashflow(flow_type: str, amount: str, note: Optional[str], flow_date: Optional[str]) -> None:
    """Add a cashflow on a date."""
    tracker = get_tracker()

    if flow_date is None:
        days = tracker.snapshot().days
        if not days:
            fail("No trading days logged yet. Pass --date to book the cashflow.")
        flow_date = days[-1].date

    try:
        tracker.add_cashflow(flow_date, parse_number(amount), flow_type, note)
    except TrackerError as e:
        fail(str(e))

    sign = "+" if flow_type == "deposit" else "-"
    console.print(
        f"[green]✓ Booked {sign}{format_currency(parse_number(amount))} on {flow_date or 'No date'}[/green]"
    )


@cashflow.command("remove")
@click.argument("ref")
def remove_cashflow(ref: str) -> None:
    """Delete a cashflow by its list number or id."""
    tracker = get_tracker()
    flows = tracker.snapshot().cashflows

    if ref.isdigit() and 1 <= int(ref) <= len(flows):
        cashflow_id = flows[int(ref) - 1].id
    elif any(flow.id == ref for flow in flows):
        cashflow_id = ref
    else:
        fail(f"No cashflow '{ref}'.")

    try:
        tracker.remove_cashflow(cashflow_id)
    except TrackerError as e:
        fail(str(e))
    console.print("[green]✓ Cashflow removed[/green]")


@cashflow.command("list")
@click.option("--date", "flow_date", default=None, help="Only show cashflows on this date.")
def list_cashflows(flow_date: Optional[str]) -> None:
    """List cashflows."""
    flows = get_tracker().snapshot().cashflows

    rows = [
        (number, flow)
        for number, flow in enumerate(flows, start=1)
        if flow_date is None or flow.date == flow_date
    ]
    if not rows:
        console.print(Panel(
            "[dim]No cashflows found[/dim]",
            title="[bold]Cashflows[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Cashflows", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Date")
    table.add_column("Type", justify="center")
    table.add_column("Amount", justify="right")
    table.add_column("Note", max_width=30)

    net = 0.0
    for number, flow in rows:
        color = "green" if flow.type == "deposit" else "red"
        table.add_row(
            str(number),
            flow.date or "-",
            f"[{color}]{flow.type}[/{color}]",
            format_currency(flow.signed_amount),
            flow.note or "-",
        )
        net += flow.signed_amount

    console.print(table)
    net_color = "green" if net >= 0 else "red"
    console.print(f"\n[bold]Net:[/bold] [{net_color}]{format_currency(net)}[/{net_color}]")
