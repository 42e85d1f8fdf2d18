"""Persistence for Trade Tracker."""

from tradetracker.db.store import DataStore

__all__ = ["DataStore"]
