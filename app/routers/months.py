"""
Months router.

Mounts under ``/months`` (prefix set in ``main.py``).  Months are created
through ``POST /managers/{id}/months``.

Endpoints
---------
GET   /{id}        — Month with its incomes and expenses.
PATCH /{id}        — Change the start date (open months only).
POST  /{id}/close  — Close the month; irreversible.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.month import MonthClose, MonthResponse, MonthUpdate
from app.services import month_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Months"])

MonthId = Annotated[int, Path(description="Month ID", ge=1)]

_ERRORS = {
    401: {"model": ErrorResponse, "description": "No valid session."},
    403: {"model": ErrorResponse, "description": "Caller is not a member of the manager."},
    404: {"model": ErrorResponse, "description": "Month not found."},
}


@router.get(
    "/{month_id}",
    response_model=MonthResponse,
    summary="Month detail",
    responses=_ERRORS,
)
def get_month(
    month_id: MonthId,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MonthResponse:
    logger.debug("GET /months/%d user=%d", month_id, current_user.id)
    month = month_service.get_month(db, current_user, month_id)
    return month_service.build_response(month)


@router.patch(
    "/{month_id}",
    response_model=MonthResponse,
    summary="Update a month",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or month closed."},
        **_ERRORS,
    },
)
def update_month(
    month_id: MonthId,
    data: MonthUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MonthResponse:
    month = month_service.update_month(db, current_user, month_id, data)
    return month_service.build_response(month)


@router.post(
    "/{month_id}/close",
    response_model=MonthResponse,
    summary="Close a month",
    description=(
        "Marks the month closed with the given 'closeDate'. A closed month "
        "and its entries can no longer be modified, and it cannot be reopened."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or month already closed."},
        **_ERRORS,
    },
)
def close_month(
    month_id: MonthId,
    data: MonthClose,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MonthResponse:
    month = month_service.close_month(db, current_user, month_id, data)
    return month_service.build_response(month)
