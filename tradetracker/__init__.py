"""Trade Tracker - daily compounding target journal."""

__version__ = "0.1.0"
