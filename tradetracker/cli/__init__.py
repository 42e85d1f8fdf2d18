"""CLI commands for Trade Tracker.

This package provides the command-line interface: setup, day entry,
cashflows, reports and backups.
"""

from tradetracker.cli.main import cli, main

__all__ = ["cli", "main"]
