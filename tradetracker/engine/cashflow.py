"""Cashflow aggregation per calendar date."""

from tradetracker.models import Cashflow


def cashflows_for_date(cashflows: list[Cashflow], date: str) -> list[Cashflow]:
    """Get the cashflows booked on a date, in stored order.

    Args:
        cashflows: All cashflows of the snapshot.
        date: Date string to match exactly.

    Returns:
        Matching cashflows.
    """
    return [flow for flow in cashflows if flow.date == date]


def net_cashflow_for_date(cashflows: list[Cashflow], date: str) -> float:
    """Calculate deposits minus withdrawals booked on a date.

    Dates are compared as plain strings, so ``"2024-01-05"`` and
    ``"2024-1-5"`` are different days.

    Args:
        cashflows: All cashflows of the snapshot.
        date: Date string to match exactly.

    Returns:
        Signed net amount, 0.0 when nothing is booked on the date.
    """
    return sum((flow.signed_amount for flow in cashflows_for_date(cashflows, date)), 0.0)
