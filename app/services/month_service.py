"""
Month (accounting period) service layer.

A month is created open and can be closed exactly once.  While closed,
neither its start date nor any of its entries may change.

Design notes
------------
- Every mutation of a month or of its entries re-reads the month row with
  ``SELECT ... FOR UPDATE`` (``lock_month``) inside the same transaction as
  the write, then re-checks ``closed``.  ``close_month`` takes the same lock,
  so a close and a concurrent entry write are serialized instead of racing
  between the check and the write.
- ``populate_existing()`` forces the locked read to overwrite the instance
  already present in the session's identity map.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, selectinload

from app.models.month import Month
from app.models.user import User
from app.schemas.month import MonthClose, MonthCreate, MonthResponse, MonthUpdate
from app.services.access_service import ensure_action_allowed, require_access
from app.utils.constants import (
    ACTION_CLOSE_MONTH,
    ACTION_CREATE_MONTH,
    ACTION_UPDATE_MONTH,
    ENTITY_MANAGER,
    ENTITY_MONTH,
)

logger = logging.getLogger(__name__)


def build_response(month: Month) -> MonthResponse:
    return MonthResponse.model_validate(month)


def lock_month(db: Session, month_id: int) -> Month:
    """Re-read a month with a row lock held until the transaction ends."""
    return (
        db.query(Month)
        .filter(Month.id == month_id)
        .with_for_update()
        .populate_existing()
        .one()
    )


def ensure_month_open(month: Month, detail: str = "Cannot modify a closed month") -> None:
    """Raise HTTP 400 with *detail* if *month* is closed."""
    if month.closed:
        logger.warning("Rejected change to closed month id=%d: %s", month.id, detail)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


# ---------------------------------------------------------------------------
# Read operations
# ---------------------------------------------------------------------------


def list_months(db: Session, user: User, manager_id: int) -> list[Month]:
    """Return a manager's months (newest start date first) with entries."""
    require_access(db, user, ENTITY_MANAGER, manager_id)
    return (
        db.query(Month)
        .options(selectinload(Month.incomes), selectinload(Month.expenses))
        .filter(Month.manager_id == manager_id)
        .order_by(Month.start_date.desc(), Month.id.desc())
        .all()
    )


def get_month(db: Session, user: User, month_id: int) -> Month:
    """Return one month with its entries.

    Raises:
        HTTPException 404: Month does not exist.
        HTTPException 403: Caller is not a member of the owning manager.
    """
    access = require_access(db, user, ENTITY_MONTH, month_id)
    return access.month


# ---------------------------------------------------------------------------
# Write operations
# ---------------------------------------------------------------------------


def create_month(db: Session, user: User, manager_id: int, data: MonthCreate) -> Month:
    """Create an open month in a manager the caller belongs to."""
    access = require_access(db, user, ENTITY_MANAGER, manager_id)
    ensure_action_allowed(access, ACTION_CREATE_MONTH)

    month = Month(manager_id=manager_id, start_date=data.start_date, closed=False)
    db.add(month)
    db.commit()
    db.refresh(month)

    logger.info(
        "Month created id=%d manager=%d start=%s by user=%d",
        month.id, manager_id, month.start_date.isoformat(), user.id,
    )
    return month


def update_month(db: Session, user: User, month_id: int, data: MonthUpdate) -> Month:
    """Change a month's start date; rejected once the month is closed.

    Raises:
        HTTPException 404 / 403: Missing month / not a member.
        HTTPException 400: The month is closed.
    """
    access = require_access(db, user, ENTITY_MONTH, month_id)
    ensure_action_allowed(access, ACTION_UPDATE_MONTH)

    month = lock_month(db, month_id)
    ensure_month_open(month)

    if data.start_date is not None:
        month.start_date = data.start_date
    db.commit()

    logger.info("Month updated id=%d by user=%d", month_id, user.id)
    return month


def close_month(db: Session, user: User, month_id: int, data: MonthClose) -> Month:
    """Transition a month from open to closed.

    Raises:
        HTTPException 404 / 403: Missing month / not a member.
        HTTPException 400: The month is already closed.
    """
    access = require_access(db, user, ENTITY_MONTH, month_id)
    ensure_action_allowed(access, ACTION_CLOSE_MONTH)

    month = lock_month(db, month_id)
    ensure_month_open(month, detail="Month already closed")

    month.closed = True
    month.close_date = data.close_date
    db.commit()

    logger.info(
        "Month closed id=%d close_date=%s by user=%d",
        month_id, data.close_date.isoformat(), user.id,
    )
    return month
