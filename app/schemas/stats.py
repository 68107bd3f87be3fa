"""
Pydantic v2 schemas for manager statistics (``GET /managers/{id}/stats``).
"""

from __future__ import annotations

from pydantic import Field

from app.schemas.common import CamelModel


class CategoryTotal(CamelModel):
    """Summed expense amount for one category label."""

    category: str
    total: float


class ManagerStatsResponse(CamelModel):
    """Aggregates over every month of a manager.

    Attributes:
        total_income: Sum of all income amounts.
        total_expense: Sum of all expense amounts.
        balance: ``total_income - total_expense``.
        expense_by_category: Per-category totals, largest first.
        average_income: ``total_income`` / months with at least one entry.
        average_expense: ``total_expense`` / months with at least one entry.
        open_month_count: Months not yet closed.
        closed_month_count: Closed months.
    """

    total_income: float
    total_expense: float
    balance: float
    expense_by_category: list[CategoryTotal] = Field(default_factory=list)
    average_income: float
    average_expense: float
    open_month_count: int
    closed_month_count: int
