"""
Income and expense service layer.

Both entry kinds follow the same sequence: the payload has already been
validated by its schema, then the owning month is looked up (404), the
caller's membership checked (403), and the month locked and checked open
(400) before the single write is committed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from app.models.expense import Expense
from app.models.income import Income
from app.models.user import User
from app.schemas.entry import (
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
    IncomeCreate,
    IncomeResponse,
    IncomeUpdate,
)
from app.services.access_service import require_access
from app.services.month_service import ensure_month_open, lock_month
from app.utils.constants import ENTITY_EXPENSE, ENTITY_INCOME, ENTITY_MONTH

logger = logging.getLogger(__name__)

_CLOSED_CREATE = "Cannot add entries to a closed month"
_CLOSED_MODIFY = "Cannot modify entries of a closed month"

# Columns that reject NULL; an explicit null in a PATCH body leaves them as is
_REQUIRED_FIELDS: frozenset[str] = frozenset({"amount", "description", "date"})


def _apply_update(entry: Income | Expense, update_data: dict[str, Any]) -> list[str]:
    changed: list[str] = []
    for field, value in update_data.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(entry, field, value)
        changed.append(field)
    return changed


def _create_entry(db: Session, user: User, model: type, values: dict[str, Any]) -> Any:
    month_id = values["month_id"]
    require_access(db, user, ENTITY_MONTH, month_id)
    month = lock_month(db, month_id)
    ensure_month_open(month, detail=_CLOSED_CREATE)

    if values.get("date") is None:
        values["date"] = datetime.now(timezone.utc).replace(tzinfo=None)

    entry = model(**values)
    db.add(entry)
    db.commit()
    db.refresh(entry)

    logger.info(
        "%s created id=%d month=%d amount=%.2f by user=%d",
        model.__name__, entry.id, month_id, float(entry.amount), user.id,
    )
    return entry


def _update_entry(
    db: Session, user: User, entity_type: str, entry_id: int, update_data: dict[str, Any]
) -> Any:
    access = require_access(db, user, entity_type, entry_id)
    month = lock_month(db, access.month.id)
    ensure_month_open(month, detail=_CLOSED_MODIFY)

    entry = access.entry
    changed = _apply_update(entry, update_data)
    db.commit()
    db.refresh(entry)

    logger.info("%s updated id=%d fields=%s by user=%d", entity_type, entry_id, changed, user.id)
    return entry


def _delete_entry(db: Session, user: User, entity_type: str, entry_id: int) -> None:
    access = require_access(db, user, entity_type, entry_id)
    month = lock_month(db, access.month.id)
    ensure_month_open(month, detail=_CLOSED_MODIFY)

    db.delete(access.entry)
    db.commit()

    logger.info("%s deleted id=%d by user=%d", entity_type, entry_id, user.id)


# ---------------------------------------------------------------------------
# Incomes
# ---------------------------------------------------------------------------


def create_income(db: Session, user: User, data: IncomeCreate) -> IncomeResponse:
    entry = _create_entry(db, user, Income, data.model_dump())
    return IncomeResponse.model_validate(entry)


def update_income(
    db: Session, user: User, income_id: int, data: IncomeUpdate
) -> IncomeResponse:
    entry = _update_entry(
        db, user, ENTITY_INCOME, income_id, data.model_dump(exclude_unset=True)
    )
    return IncomeResponse.model_validate(entry)


def delete_income(db: Session, user: User, income_id: int) -> None:
    _delete_entry(db, user, ENTITY_INCOME, income_id)


# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------


def create_expense(db: Session, user: User, data: ExpenseCreate) -> ExpenseResponse:
    entry = _create_entry(db, user, Expense, data.model_dump())
    return ExpenseResponse.model_validate(entry)


def update_expense(
    db: Session, user: User, expense_id: int, data: ExpenseUpdate
) -> ExpenseResponse:
    entry = _update_entry(
        db, user, ENTITY_EXPENSE, expense_id, data.model_dump(exclude_unset=True)
    )
    return ExpenseResponse.model_validate(entry)


def delete_expense(db: Session, user: User, expense_id: int) -> None:
    _delete_entry(db, user, ENTITY_EXPENSE, expense_id)
