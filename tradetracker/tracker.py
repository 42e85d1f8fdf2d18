"""Tracker service: owns the store and applies user mutations.

Every mutation re-reads the stored snapshot, changes it, saves it and
returns a freshly derived view. There is no locking; two processes
writing at once can overwrite each other's changes.
"""

import logging
import math
import time
import uuid
from datetime import date, timedelta
from typing import Any, Optional

from tradetracker.db.store import DataStore
from tradetracker.engine import TrackerView, derive
from tradetracker.exceptions import InvalidInputError, NotConfiguredError
from tradetracker.models import (
    Cashflow,
    DayEntry,
    Settings,
    TrackerData,
    WithdrawalSettings,
)

logger = logging.getLogger(__name__)

DAY_FIELDS = frozenset({"date", "actual_close", "no_trade"})


def generate_id(prefix: str) -> str:
    """Generate a record id such as ``day_1718000000000_3f2a9c1b04de``."""
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"


def _next_date(base: str, fallback: date) -> str:
    try:
        start = date.fromisoformat(base)
    except ValueError:
        start = fallback
    return (start + timedelta(days=1)).isoformat()


def default_day_date(
    days: list[DayEntry], start_date: str = "", today: Optional[date] = None
) -> str:
    """Pick the date for a newly added day.

    The first day takes the start date. Later days take today's date unless
    a day already has it, in which case the day after the last day's date.

    Args:
        days: Existing days in sequence order.
        start_date: Configured start date.
        today: Date to treat as today (defaults to date.today()).

    Returns:
        ISO date string.
    """
    today = today or date.today()
    today_str = today.isoformat()

    if not days and start_date:
        return start_date
    if not any(day.date == today_str for day in days):
        return today_str

    last_date = days[-1].date or today_str
    return _next_date(last_date, today)


class Tracker:
    """Single owned store of the tracker document."""

    def __init__(self, store: DataStore):
        """Initialize the tracker.

        Args:
            store: DataStore holding the snapshot.
        """
        self._store = store

    @property
    def store(self) -> DataStore:
        return self._store

    def snapshot(self) -> TrackerData:
        """Read the current snapshot."""
        return self._store.load_snapshot()

    def view(self) -> TrackerView:
        """Derive the view of the current snapshot."""
        return derive(self.snapshot())

    def _commit(self, data: TrackerData) -> TrackerView:
        self._store.save_snapshot(data)
        return derive(data)

    # ==================== Settings ====================

    def configure(self, settings: Settings) -> TrackerView:
        """Replace the settings, keeping days and cashflows."""
        data = self.snapshot()
        logger.debug("Configuring tracker: %s", settings)
        return self._commit(data.model_copy(update={"settings": settings}))

    def set_withdrawal_policy(self, policy: WithdrawalSettings) -> TrackerView:
        """Replace the withdrawal policy."""
        data = self.snapshot()
        return self._commit(data.model_copy(update={"withdrawal": policy}))

    def reset(self) -> TrackerView:
        """Remove everything."""
        logger.info("Resetting tracker data")
        self._store.clear()
        return derive(TrackerData.empty())

    # ==================== Days ====================

    def add_day(self, day_date: Optional[str] = None, today: Optional[date] = None) -> TrackerView:
        """Append a pending day to the sequence.

        Args:
            day_date: Date of the day; picked by default_day_date when None.
            today: Date to treat as today.

        Raises:
            NotConfiguredError: If no settings exist yet.
        """
        data = self.snapshot()
        if data.settings is None:
            raise NotConfiguredError("Set up the tracker before adding days.")

        if day_date is None:
            day_date = default_day_date(data.days, data.settings.start_date, today)

        day = DayEntry(id=generate_id("day"), date=day_date)
        logger.debug("Adding day %s (%s)", day.id, day.date)
        return self._commit(data.model_copy(update={"days": data.days + [day]}))

    def update_day(self, day_id: str, **changes: Any) -> TrackerView:
        """Edit date, actual_close or no_trade of a day.

        Unknown day ids leave the snapshot unchanged.

        Raises:
            InvalidInputError: If a change names another field or has a bad value.
        """
        unknown = set(changes) - DAY_FIELDS
        if unknown:
            raise InvalidInputError(f"Cannot edit day field(s): {', '.join(sorted(unknown))}")

        data = self.snapshot()
        if data.find_day(day_id) is None:
            logger.debug("update_day: no day %s", day_id)
            return derive(data)

        days = []
        for day in data.days:
            if day.id == day_id:
                try:
                    day = DayEntry.model_validate({**day.model_dump(), **changes})
                except ValueError as e:
                    raise InvalidInputError(f"Invalid day update: {e}") from e
            days.append(day)

        return self._commit(data.model_copy(update={"days": days}))

    def remove_day(self, day_id: str) -> TrackerView:
        """Delete a day by id."""
        data = self.snapshot()
        days = [day for day in data.days if day.id != day_id]
        return self._commit(data.model_copy(update={"days": days}))

    def make_current(self, day_id: str) -> TrackerView:
        """Move a day to the end of the sequence so it becomes the current day."""
        data = self.snapshot()
        day = data.find_day(day_id)
        if day is None:
            return derive(data)

        days = [other for other in data.days if other.id != day_id] + [day]
        return self._commit(data.model_copy(update={"days": days}))

    # ==================== Cashflows ====================

    def add_cashflow(
        self,
        flow_date: str,
        amount: float,
        flow_type: str,
        note: Optional[str] = None,
    ) -> TrackerView:
        """Record a deposit or withdrawal.

        Raises:
            InvalidInputError: If amount is not a positive number or the type is unknown.
        """
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidInputError("Cashflow amount must be a positive number.")
        if flow_type not in ("deposit", "withdrawal"):
            raise InvalidInputError(f"Unknown cashflow type: {flow_type}")

        note = (note or "").strip() or None
        flow = Cashflow(
            id=generate_id("cashflow"),
            date=flow_date,
            amount=amount,
            type=flow_type,
            note=note,
        )

        data = self.snapshot()
        return self._commit(data.model_copy(update={"cashflows": data.cashflows + [flow]}))

    def remove_cashflow(self, cashflow_id: str) -> TrackerView:
        """Delete a cashflow by id."""
        data = self.snapshot()
        cashflows = [flow for flow in data.cashflows if flow.id != cashflow_id]
        return self._commit(data.model_copy(update={"cashflows": cashflows}))
