"""TrackerData snapshot model."""

from typing import Optional

from pydantic import BaseModel, Field

from tradetracker.models.cashflow import Cashflow
from tradetracker.models.day import DayEntry
from tradetracker.models.settings import Settings, WithdrawalSettings


class TrackerData(BaseModel):
    """The whole persisted document: settings, days, cashflows, policy."""

    settings: Optional[Settings] = Field(default=None, description="Account setup")
    days: list[DayEntry] = Field(default_factory=list, description="Days in trading order")
    cashflows: list[Cashflow] = Field(default_factory=list, description="Deposits/withdrawals")
    withdrawal: WithdrawalSettings = Field(
        default_factory=WithdrawalSettings, description="Withdrawal policy"
    )

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    @classmethod
    def empty(cls) -> "TrackerData":
        """Snapshot of a tracker that has not been configured yet."""
        return cls()

    def find_day(self, day_id: str) -> Optional[DayEntry]:
        """Get a day by id."""
        for day in self.days:
            if day.id == day_id:
                return day
        return None
