"""Cashflow data model."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

CashflowType = Literal["deposit", "withdrawal"]


class Cashflow(BaseModel):
    """A deposit into or withdrawal from the trading account."""

    id: str = Field(..., min_length=1, description="Cashflow identifier")
    date: str = Field(..., description="Calendar date the flow belongs to")
    amount: float = Field(..., ge=0, description="Magnitude of the flow")
    type: CashflowType = Field(..., description="deposit or withdrawal")
    note: Optional[str] = Field(default=None, description="User note")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @property
    def signed_amount(self) -> float:
        """Amount with withdrawals negative."""
        return self.amount if self.type == "deposit" else -self.amount
