"""
Managers router.

Mounts under ``/managers`` (prefix set in ``main.py``).

All endpoints require a valid session cookie (``get_current_user``).
Every endpoint addressing a specific manager additionally requires the
caller to be a member of it, except ``/join``.

Endpoints
---------
GET   /                — Managers the caller belongs to, with members and months.
POST  /                — Create a manager; the caller becomes its admin.
GET   /{id}            — Manager detail.
PATCH /{id}            — Update name and/or description.
POST  /{id}/join       — Join a manager as "miembro".
GET   /{id}/months     — Months of the manager with their entries.
POST  /{id}/months     — Create an open month.
GET   /{id}/stats      — Totals, averages and category breakdown.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.manager import ManagerCreate, ManagerResponse, ManagerUpdate
from app.schemas.month import MonthCreate, MonthResponse
from app.schemas.stats import ManagerStatsResponse
from app.services import manager_service, month_service, stats_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Managers"])

ManagerId = Annotated[int, Path(description="Manager ID", ge=1)]

_MEMBER_ERRORS = {
    401: {"model": ErrorResponse, "description": "No valid session."},
    403: {"model": ErrorResponse, "description": "Caller is not a member of the manager."},
    404: {"model": ErrorResponse, "description": "Manager not found."},
}


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=list[ManagerResponse],
    summary="List the caller's managers",
    responses={401: _MEMBER_ERRORS[401]},
)
def list_managers(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[ManagerResponse]:
    logger.debug("GET /managers user=%d", current_user.id)
    managers = manager_service.list_managers(db, current_user)
    return [manager_service.build_response(m) for m in managers]


# ---------------------------------------------------------------------------
# POST /
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=ManagerResponse,
    status_code=201,
    summary="Create a manager",
    description=(
        "Creates a shared ledger and, in the same transaction, an 'admin' "
        "membership for the caller."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input."},
        401: _MEMBER_ERRORS[401],
    },
)
def create_manager(
    data: ManagerCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ManagerResponse:
    manager = manager_service.create_manager(db, current_user, data)
    return manager_service.build_response(manager)


# ---------------------------------------------------------------------------
# GET /{id}
# ---------------------------------------------------------------------------


@router.get(
    "/{manager_id}",
    response_model=ManagerResponse,
    summary="Manager detail",
    responses=_MEMBER_ERRORS,
)
def get_manager(
    manager_id: ManagerId,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ManagerResponse:
    logger.debug("GET /managers/%d user=%d", manager_id, current_user.id)
    manager = manager_service.get_manager(db, current_user, manager_id)
    return manager_service.build_response(manager)


# ---------------------------------------------------------------------------
# PATCH /{id}
# ---------------------------------------------------------------------------


@router.patch(
    "/{manager_id}",
    response_model=ManagerResponse,
    summary="Update a manager",
    description="Only the fields present in the body are modified.",
    responses={400: {"model": ErrorResponse, "description": "Invalid input."}, **_MEMBER_ERRORS},
)
def update_manager(
    manager_id: ManagerId,
    data: ManagerUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ManagerResponse:
    manager = manager_service.update_manager(db, current_user, manager_id, data)
    return manager_service.build_response(manager)


# ---------------------------------------------------------------------------
# POST /{id}/join
# ---------------------------------------------------------------------------


@router.post(
    "/{manager_id}/join",
    response_model=MessageResponse,
    summary="Join a manager",
    description="Adds the caller to the manager with the 'miembro' role.",
    responses={
        400: {"model": ErrorResponse, "description": "Already a member."},
        401: _MEMBER_ERRORS[401],
        404: _MEMBER_ERRORS[404],
    },
)
def join_manager(
    manager_id: ManagerId,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    membership = manager_service.join_manager(db, current_user, manager_id)
    return MessageResponse(
        message="Joined manager successfully",
        detail=f"role={membership.role}",
    )


# ---------------------------------------------------------------------------
# GET /{id}/months
# ---------------------------------------------------------------------------


@router.get(
    "/{manager_id}/months",
    response_model=list[MonthResponse],
    summary="List a manager's months",
    responses=_MEMBER_ERRORS,
)
def list_months(
    manager_id: ManagerId,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[MonthResponse]:
    months = month_service.list_months(db, current_user, manager_id)
    return [month_service.build_response(m) for m in months]


# ---------------------------------------------------------------------------
# POST /{id}/months
# ---------------------------------------------------------------------------


@router.post(
    "/{manager_id}/months",
    response_model=MonthResponse,
    status_code=201,
    summary="Create a month",
    description=(
        "Creates an open accounting period. 'startDate' accepts YYYY-MM-DD "
        "or a full ISO-8601 timestamp."
    ),
    responses={400: {"model": ErrorResponse, "description": "Invalid input."}, **_MEMBER_ERRORS},
)
def create_month(
    manager_id: ManagerId,
    data: MonthCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MonthResponse:
    month = month_service.create_month(db, current_user, manager_id, data)
    return month_service.build_response(month)


# ---------------------------------------------------------------------------
# GET /{id}/stats
# ---------------------------------------------------------------------------


@router.get(
    "/{manager_id}/stats",
    response_model=ManagerStatsResponse,
    summary="Manager statistics",
    description=(
        "Totals, balance, per-category expense breakdown (largest first), "
        "averages over months with entries, and open/closed month counts."
    ),
    responses=_MEMBER_ERRORS,
)
def get_stats(
    manager_id: ManagerId,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ManagerStatsResponse:
    logger.debug("GET /managers/%d/stats user=%d", manager_id, current_user.id)
    return stats_service.get_manager_stats(db, current_user, manager_id)
