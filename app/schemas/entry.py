"""
Pydantic v2 schemas for ledger entries (incomes and expenses).

Amounts must be strictly positive and fit the ``Numeric(12, 2)`` column (at
most two decimals, ten integer digits); descriptions must be non-empty.  These
rules are enforced here so malformed payloads fail before any database lookup.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import Field

from app.schemas.common import CamelModel, DateInput

# Strictly positive and representable in Numeric(12, 2) without rounding
Amount = Annotated[Decimal, Field(gt=0, max_digits=12, decimal_places=2)]


class IncomeCreate(CamelModel):
    """Payload for ``POST /incomes``."""

    month_id: int = Field(..., description="Month the income belongs to")
    amount: Amount = Field(..., description="Strictly positive amount")
    description: str = Field(..., min_length=1, max_length=500)
    date: DateInput | None = Field(default=None, description="Defaults to now")


class IncomeUpdate(CamelModel):
    """Payload for ``PATCH /incomes/{id}``; only supplied fields change."""

    amount: Amount | None = None
    description: str | None = Field(default=None, min_length=1, max_length=500)
    date: DateInput | None = None


class IncomeResponse(CamelModel):
    id: int
    month_id: int
    amount: float
    description: str
    date: datetime


class ExpenseCreate(CamelModel):
    """Payload for ``POST /expenses``."""

    month_id: int = Field(..., description="Month the expense belongs to")
    amount: Amount = Field(..., description="Strictly positive amount")
    description: str = Field(..., min_length=1, max_length=500)
    category: str | None = Field(default=None, max_length=100)
    date: DateInput | None = Field(default=None, description="Defaults to now")


class ExpenseUpdate(CamelModel):
    """Payload for ``PATCH /expenses/{id}``; only supplied fields change."""

    amount: Amount | None = None
    description: str | None = Field(default=None, min_length=1, max_length=500)
    category: str | None = Field(default=None, max_length=100)
    date: DateInput | None = None


class ExpenseResponse(CamelModel):
    id: int
    month_id: int
    amount: float
    description: str
    category: str | None
    date: datetime
