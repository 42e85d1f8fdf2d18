"""Settings and WithdrawalSettings data models."""

from typing import Literal

from pydantic import BaseModel, Field

WithdrawalRule = Literal["profit_start", "profit_hwm", "goal_only"]

WITHDRAWAL_RULES: tuple[str, ...] = ("profit_start", "profit_hwm", "goal_only")


class Settings(BaseModel):
    """Account setup the whole day sequence compounds against."""

    starting_capital: float = Field(
        ..., ge=0, alias="startingCapital", description="Capital at day 0"
    )
    daily_target_pct: float = Field(
        ..., alias="dailyTargetPct", description="Daily growth target in percent"
    )
    start_date: str = Field(
        default="", alias="startDate", description="First trading date (YYYY-MM-DD)"
    )
    target_goal: float = Field(
        default=0.0, alias="targetGoal", description="Absolute equity goal"
    )

    model_config = {"frozen": True, "populate_by_name": True, "allow_inf_nan": False}


class WithdrawalSettings(BaseModel):
    """Payout policy used for the suggested withdrawal."""

    rule: WithdrawalRule = Field(
        default="profit_start", description="Which amount the payout is measured on"
    )
    rate: float = Field(default=0.0, ge=0, description="Payout percentage of the base")
    buffer: float = Field(
        default=0.0, ge=0, description="Amount kept below the high-water mark (profit_hwm)"
    )

    model_config = {"frozen": True, "populate_by_name": True, "allow_inf_nan": False}
