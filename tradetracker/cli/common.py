"""Helpers shared by the CLI commands: store access, parsing, formatting."""

import math
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from tradetracker.models import DayEntry

console = Console()

STATUS_STYLES = {
    "goal": "bold green",
    "green": "green",
    "neutral": "yellow",
    "red": "red",
    "pending": "dim",
}

STATUS_LABELS = {
    "goal": "Met Goal",
    "green": "Green",
    "neutral": "Neutral",
    "red": "Red",
    "pending": "Pending",
}


def get_config() -> dict:
    """Lazily load configuration."""
    from tradetracker.config import load_config

    return load_config()


def get_tracker():
    """Get the tracker bound to the configured database."""
    from tradetracker.config import get_db_path
    from tradetracker.db.store import DataStore
    from tradetracker.tracker import Tracker

    return Tracker(DataStore(get_db_path(get_config())))


def parse_number(text: Optional[str]) -> float:
    """Parse user input as a number, 0.0 when it is not one."""
    value = parse_optional_number(text)
    return 0.0 if value is None else value


def parse_optional_number(text: Optional[str]) -> Optional[float]:
    """Parse user input as a number, None when empty or not a number."""
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def format_currency(value: float, currency: Optional[str] = None) -> str:
    """Format an amount as e.g. ``$10,100.00`` or ``-$50.00``."""
    symbol = currency if currency is not None else get_config()["display"]["currency"]
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percent(value: float, decimals: int = 2) -> str:
    """Format a percentage with a fixed number of decimals."""
    return f"{value:.{decimals}f}%"


def status_label(status: str, entry: Optional[DayEntry] = None) -> str:
    """Human label for a day status."""
    if entry is not None and entry.no_trade:
        return "No Trade"
    return STATUS_LABELS.get(status, "Pending")


def styled_status(status: str, entry: Optional[DayEntry] = None) -> str:
    """Status label wrapped in rich markup."""
    style = STATUS_STYLES.get(status, "dim")
    return f"[{style}]{status_label(status, entry)}[/{style}]"


def error_panel(message: str, title: str = "Error") -> Panel:
    """Red panel used for command failures."""
    return Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    )


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(error_panel(message, title))
    raise SystemExit(1)


def require_setup_panel() -> Panel:
    """Panel shown when a command needs settings that do not exist yet."""
    return Panel(
        "[yellow]Tracker is not set up yet.[/yellow]\n\n"
        "Run [cyan]tradetracker setup[/cyan] to enter your starting capital and target.",
        title="[bold yellow]Setup Required[/bold yellow]",
        border_style="yellow",
    )
