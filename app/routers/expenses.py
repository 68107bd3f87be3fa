"""
Expenses router.

Mounts under ``/expenses`` (prefix set in ``main.py``).

Every write checks, in order: payload shape (400), month or expense
existence (404), membership in the owning manager (403) and that the month
is still open (400).  The optional category feeds the per-category
breakdown of ``GET /managers/{id}/stats``; empty categories count as
"uncategorized".

Endpoints
---------
POST   /      — Create an expense {monthId, amount, description, category?, date?}.
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
from app.schemas.entry import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from app.services import entry_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Expenses"])

ExpenseId = Annotated[int, Path(description="Expense ID", ge=1)]

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid input or month closed."},
    401: {"model": ErrorResponse, "description": "No valid session."},
    403: {"model": ErrorResponse, "description": "Caller is not a member of the manager."},
    404: {"model": ErrorResponse, "description": "Month or expense not found."},
}


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=201,
    summary="Create an expense",
    responses=_ERRORS,
)
def create_expense(
    data: ExpenseCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ExpenseResponse:
    return entry_service.create_expense(db, current_user, data)


@router.patch(
    "/{expense_id}",
    response_model=ExpenseResponse,
    summary="Update an expense",
    responses=_ERRORS,
)
def update_expense(
    expense_id: ExpenseId,
    data: ExpenseUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ExpenseResponse:
    return entry_service.update_expense(db, current_user, expense_id, data)


@router.delete(
    "/{expense_id}",
    response_model=MessageResponse,
    summary="Delete an expense",
    responses=_ERRORS,
)
def delete_expense(
    expense_id: ExpenseId,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    entry_service.delete_expense(db, current_user, expense_id)
    return MessageResponse(message="Expense deleted")
