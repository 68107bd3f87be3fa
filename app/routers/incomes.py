"""
Incomes router.

Mounts under ``/incomes`` (prefix set in ``main.py``).

Every write checks, in order: payload shape (400), month or income
existence (404), membership in the owning manager (403) and that the month
is still open (400).

Endpoints
---------
POST   /      — Create an income {monthId, amount, description, date?}.
PATCH  /{id}  — Partial update.
DELETE /{id}  — Delete.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.entry import IncomeCreate, IncomeResponse, IncomeUpdate
from app.services import entry_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Incomes"])

IncomeId = Annotated[int, Path(description="Income ID", ge=1)]

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid input or month closed."},
    401: {"model": ErrorResponse, "description": "No valid session."},
    403: {"model": ErrorResponse, "description": "Caller is not a member of the manager."},
    404: {"model": ErrorResponse, "description": "Month or income not found."},
}


@router.post(
    "",
    response_model=IncomeResponse,
    status_code=201,
    summary="Create an income",
    responses=_ERRORS,
)
def create_income(
    data: IncomeCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> IncomeResponse:
    return entry_service.create_income(db, current_user, data)


@router.patch(
    "/{income_id}",
    response_model=IncomeResponse,
    summary="Update an income",
    responses=_ERRORS,
)
def update_income(
    income_id: IncomeId,
    data: IncomeUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> IncomeResponse:
    return entry_service.update_income(db, current_user, income_id, data)


@router.delete(
    "/{income_id}",
    response_model=MessageResponse,
    summary="Delete an income",
    responses=_ERRORS,
)
def delete_income(
    income_id: IncomeId,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    entry_service.delete_income(db, current_user, income_id)
    return MessageResponse(message="Income deleted")
