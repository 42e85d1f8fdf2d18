"""Backup commands for Trade Tracker CLI.

Export and import the whole tracker document as JSON.
"""

from pathlib import Path

import click

from tradetracker.cli.common import console, fail, get_tracker
from tradetracker.exceptions import InvalidSnapshotError, TrackerError


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path), required=False)
def export(path: Path | None) -> None:
    """Export all tracker data to a JSON file.

    \b
    Examples:
      tradetracker export
      tradetracker export backup.json
    """
    from tradetracker.transfer import DEFAULT_EXPORT_NAME, export_snapshot

    target = path or Path(DEFAULT_EXPORT_NAME)
    data = get_tracker().snapshot()
    try:
        export_snapshot(data, target)
    except OSError as e:
        fail(f"Failed to write {target}:\n\n{e}")

    console.print(f"[green]✓ Exported {len(data.days)} days to {target}[/green]")


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_data(path: Path) -> None:
    """Replace all tracker data with the contents of a JSON file.

    Invalid files are rejected and the current data is left untouched.

    \b
    Examples:
      tradetracker import backup.json
    """
    from tradetracker.transfer import import_snapshot

    tracker = get_tracker()
    try:
        data = import_snapshot(path, tracker.store)
    except InvalidSnapshotError as e:
        fail(str(e), title="Import Failed")
    except TrackerError as e:
        fail(str(e))

    console.print(
        f"[green]✓ Imported {len(data.days)} days and {len(data.cashflows)} cashflows[/green]"
    )
