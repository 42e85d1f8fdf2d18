"""Main CLI entry point for Trade Tracker.

The command modules (setup, days, cashflow, report, backup) are imported
only when one of their commands runs, so ``--help`` and quick commands
do not pay for loading rich tables and the engine.
"""

import importlib
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """Top-level group whose commands live in separate modules.

    ``lazy_subcommands`` maps a command name to the module defining it.
    The command object is looked up by its click name, so commands whose
    function name differs (``import`` is ``import_data``) resolve too.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)
        if cmd is None and cmd_name in self._lazy_subcommands:
            cmd = self._resolve(cmd_name)
            self.add_command(cmd)
        return cmd

    def _resolve(self, cmd_name: str) -> click.Command:
        """Import the owning module and find the command named ``cmd_name``."""
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        for value in vars(module).values():
            if isinstance(value, click.Command) and value.name == cmd_name:
                return value

        raise click.ClickException(f"Command '{cmd_name}' is not defined in {module_path}")


LAZY_SUBCOMMANDS = {
    "init": "tradetracker.cli.setup",
    "setup": "tradetracker.cli.setup",
    "reset": "tradetracker.cli.setup",
    "day": "tradetracker.cli.days",
    "history": "tradetracker.cli.days",
    "cashflow": "tradetracker.cli.cashflow",
    "summary": "tradetracker.cli.report",
    "stats": "tradetracker.cli.report",
    "withdraw": "tradetracker.cli.report",
    "export": "tradetracker.cli.backup",
    "import": "tradetracker.cli.backup",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(level: int) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradetracker")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Trade Tracker - daily compounding target journal.

    Record each trading day's account close against a compounding daily
    target, log deposits and withdrawals, and review streaks, drawdown
    and suggested withdrawals.

    \b
    Quick Start:
      tradetracker setup --capital 10000 --target-pct 1
      tradetracker day add             # Start a trading day
      tradetracker day close 10120     # Record the close of the current day
      tradetracker summary             # Equity, target and drawdown
    """
    from tradetracker.config import get_log_level, load_config

    ctx.ensure_object(dict)
    config = load_config()
    setup_logging(logging.DEBUG if verbose else get_log_level(config))
    ctx.obj["config"] = config


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
