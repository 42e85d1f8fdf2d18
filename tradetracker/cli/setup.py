"""Setup commands for Trade Tracker CLI.

Handles the config file, account settings and resetting all data.
"""

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
)
from tradetracker.exceptions import TrackerError


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create the configuration file.

    \b
    Examples:
      tradetracker init
      tradetracker init --force
    """
    from tradetracker.config import create_template_config, get_config_path

    config_path = get_config_path()
    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        return

    path = create_template_config(config_path)
    console.print(f"[green]✓ Wrote config to {path}[/green]")


@click.command()
@click.option("--capital", "capital", default=None, help="Starting capital.")
@click.option("--target-pct", "target_pct", default=None, help="Daily target in percent.")
@click.option("--start-date", "start_date", default=None, help="First trading date (YYYY-MM-DD).")
@click.option("--goal", "goal", default=None, help="Absolute equity goal.")
def setup(
    capital: Optional[str],
    target_pct: Optional[str],
    start_date: Optional[str],
    goal: Optional[str],
) -> None:
    """Enter or change the account settings.

    Options left out keep their current value (or are prompted for on
    first setup). Values that are not numbers are stored as 0.

    \b
    Examples:
      tradetracker setup --capital 10000 --target-pct 1 --goal 20000
      tradetracker setup --target-pct 0.5
    """
    from tradetracker.models import Settings

    tracker = get_tracker()
    current = tracker.snapshot().settings

    if current is None:
        capital = capital if capital is not None else click.prompt("Starting capital")
        target_pct = target_pct if target_pct is not None else click.prompt("Daily target %")
        start_date = start_date if start_date is not None else click.prompt(
            "Start date", default="", show_default=False
        )
        goal = goal if goal is not None else click.prompt("Target goal", default="0")

    settings = Settings(
        starting_capital=max(
            0.0, parse_number(capital) if capital is not None else current.starting_capital
        ),
        daily_target_pct=(
            parse_number(target_pct) if target_pct is not None else current.daily_target_pct
        ),
        start_date=start_date.strip() if start_date is not None else current.start_date,
        target_goal=parse_number(goal) if goal is not None else current.target_goal,
    )

    try:
        tracker.configure(settings)
    except TrackerError as e:
        fail(str(e))

    console.print(Panel(
        f"Starting Capital: [bold]{format_currency(settings.starting_capital)}[/bold]\n"
        f"Daily Target:     [bold]{format_percent(settings.daily_target_pct)}[/bold]\n"
        f"Start Date:       {settings.start_date or '-'}\n"
        f"Target Goal:      {format_currency(settings.target_goal)}",
        title="[bold cyan]Settings Saved[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.confirmation_option(prompt="Delete all settings, days and cashflows?")
def reset() -> None:
    """Delete all tracker data.

    \b
    Examples:
      tradetracker reset --yes
    """
    try:
        get_tracker().reset()
    except TrackerError as e:
        fail(str(e))
    console.print("[green]✓ All tracker data removed[/green]")
