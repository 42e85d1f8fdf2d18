"""Errors raised outside the metrics engine."""

from __future__ import annotations


class TrackerError(RuntimeError):
    pass


class NotConfiguredError(TrackerError):
    pass


class InvalidInputError(TrackerError):
    pass


class InvalidSnapshotError(TrackerError):
    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source
