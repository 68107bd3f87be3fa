"""
Manager statistics service layer.

Statistics are recomputed from the full entry set on every request; there
is no caching or incremental maintenance.

Design notes
------------
- Sums are accumulated as ``Decimal`` (the ``Numeric`` column type) and only
  converted to ``float`` for the response.
- ``balance`` is derived from the already converted totals so that
  ``totalIncome - totalExpense == balance`` holds exactly in the JSON output.
- Averages divide by the number of months holding at least one entry and
  fall back to 0 when there is none.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Any, Iterable

from sqlalchemy.orm import Session, selectinload

from app.models.month import Month
from app.models.user import User
from app.schemas.stats import CategoryTotal, ManagerStatsResponse
from app.services.access_service import require_access
from app.utils.constants import ENTITY_MANAGER, UNCATEGORIZED

logger = logging.getLogger(__name__)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute_stats(months: Iterable[Any]) -> ManagerStatsResponse:
    """Aggregate totals, averages and category breakdown over *months*.

    Args:
        months: Objects exposing ``closed``, ``incomes`` and ``expenses``
                (entries expose ``amount``; expenses also ``category``).

    Returns:
        A populated ``ManagerStatsResponse``.
    """
    total_income = Decimal("0")
    total_expense = Decimal("0")
    by_category: dict[str, Decimal] = defaultdict(Decimal)
    months_with_data = 0
    open_count = 0
    closed_count = 0

    for month in months:
        if month.closed:
            closed_count += 1
        else:
            open_count += 1

        if month.incomes or month.expenses:
            months_with_data += 1

        for income in month.incomes:
            total_income += _to_decimal(income.amount)
        for expense in month.expenses:
            amount = _to_decimal(expense.amount)
            total_expense += amount
            by_category[expense.category or UNCATEGORIZED] += amount

    income_f = float(total_income)
    expense_f = float(total_expense)

    expense_by_category = [
        CategoryTotal(category=category, total=float(total))
        for category, total in sorted(
            by_category.items(), key=lambda item: item[1], reverse=True
        )
    ]

    if months_with_data:
        average_income = float(total_income / months_with_data)
        average_expense = float(total_expense / months_with_data)
    else:
        average_income = 0.0
        average_expense = 0.0

    return ManagerStatsResponse(
        total_income=income_f,
        total_expense=expense_f,
        balance=income_f - expense_f,
        expense_by_category=expense_by_category,
        average_income=average_income,
        average_expense=average_expense,
        open_month_count=open_count,
        closed_month_count=closed_count,
    )


def get_manager_stats(db: Session, user: User, manager_id: int) -> ManagerStatsResponse:
    """Load every month of a manager with its entries and aggregate them.

    Raises:
        HTTPException 404: Manager does not exist.
        HTTPException 403: Caller is not a member.
    """
    require_access(db, user, ENTITY_MANAGER, manager_id)

    months = (
        db.query(Month)
        .options(selectinload(Month.incomes), selectinload(Month.expenses))
        .filter(Month.manager_id == manager_id)
        .all()
    )
    stats = compute_stats(months)

    logger.debug(
        "get_manager_stats: manager=%d months=%d income=%.2f expense=%.2f",
        manager_id, len(months), stats.total_income, stats.total_expense,
    )
    return stats
