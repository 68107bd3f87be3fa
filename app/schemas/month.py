"""
Pydantic v2 schemas for months (accounting periods).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel, DateInput
from app.schemas.entry import ExpenseResponse, IncomeResponse


class MonthCreate(CamelModel):
    """Payload for ``POST /managers/{id}/months``."""

    start_date: DateInput = Field(..., description="Start of the period")


class MonthUpdate(CamelModel):
    """Payload for ``PATCH /months/{id}``.  Rejected while the month is closed."""

    start_date: DateInput | None = Field(default=None, description="New start date")


class MonthClose(CamelModel):
    """Payload for ``POST /months/{id}/close``."""

    close_date: DateInput = Field(..., description="Closing date")


class MonthResponse(CamelModel):
    """Month with its entries, newest first."""

    id: int
    manager_id: int
    start_date: datetime
    close_date: datetime | None
    closed: bool
    incomes: list[IncomeResponse] = Field(default_factory=list)
    expenses: list[ExpenseResponse] = Field(default_factory=list)
