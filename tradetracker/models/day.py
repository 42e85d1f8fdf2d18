"""DayEntry data model."""

from typing import Optional

from pydantic import BaseModel, Field


class DayEntry(BaseModel):
    """One user-entered trading day.

    The position of the entry in the day list is the trading-day sequence;
    ``date`` is informational and only links the day to cashflows.
    """

    id: str = Field(..., min_length=1, description="Entry identifier")
    date: str = Field(default="", description="Calendar date (YYYY-MM-DD)")
    actual_close: Optional[float] = Field(
        default=None, alias="actualClose", description="Reported account close"
    )
    no_trade: bool = Field(
        default=False, alias="noTrade", description="Day intentionally not traded"
    )

    model_config = {"frozen": True, "populate_by_name": True, "allow_inf_nan": False}

    @property
    def close_ignored(self) -> bool:
        """A close was stored on a no-trade day and is not used for derivation."""
        return self.no_trade and self.actual_close is not None

    @property
    def reported_close(self) -> Optional[float]:
        """Close that counts as reported equity."""
        if self.no_trade:
            return None
        return self.actual_close
