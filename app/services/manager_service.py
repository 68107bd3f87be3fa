"""
Manager (shared ledger) service layer.

All database access for the ``/managers`` endpoints that concern the ledger
itself and its memberships lives here.  Month and statistics operations live
in ``month_service`` and ``stats_service``.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.models.manager import Manager
from app.models.membership import Membership
from app.models.month import Month
from app.models.user import User
from app.schemas.manager import ManagerCreate, ManagerResponse, ManagerUpdate
from app.services.access_service import ensure_action_allowed, require_access
from app.utils.constants import (
    ACTION_UPDATE_MANAGER,
    ENTITY_MANAGER,
    ROLE_ADMIN,
    ROLE_MEMBER,
)

logger = logging.getLogger(__name__)


def _with_details(query):
    """Eager-load members (with users) and months (with entries)."""
    return query.options(
        selectinload(Manager.memberships).selectinload(Membership.user),
        selectinload(Manager.months).selectinload(Month.incomes),
        selectinload(Manager.months).selectinload(Month.expenses),
    )


def build_response(manager: Manager) -> ManagerResponse:
    return ManagerResponse.model_validate(manager)


# ---------------------------------------------------------------------------
# Read operations
# ---------------------------------------------------------------------------


def list_managers(db: Session, user: User) -> list[Manager]:
    """Return every manager *user* belongs to, oldest first."""
    query = (
        db.query(Manager)
        .join(Membership, Membership.manager_id == Manager.id)
        .filter(Membership.user_id == user.id)
        .order_by(Manager.id)
    )
    managers = _with_details(query).all()
    logger.debug("list_managers: user=%d count=%d", user.id, len(managers))
    return managers


def get_manager(db: Session, user: User, manager_id: int) -> Manager:
    """Return one manager with members and months.

    Raises:
        HTTPException 404: Manager does not exist.
        HTTPException 403: Caller is not a member.
    """
    require_access(db, user, ENTITY_MANAGER, manager_id)
    return _with_details(db.query(Manager).filter(Manager.id == manager_id)).one()


# ---------------------------------------------------------------------------
# Write operations
# ---------------------------------------------------------------------------


def create_manager(db: Session, user: User, data: ManagerCreate) -> Manager:
    """Create a manager and the creator's ``admin`` membership in one commit."""
    manager = Manager(name=data.name, description=data.description)
    manager.memberships.append(Membership(user_id=user.id, role=ROLE_ADMIN))
    db.add(manager)
    db.commit()
    db.refresh(manager)

    logger.info("Manager created id=%d name='%s' by user=%d", manager.id, manager.name, user.id)
    return manager


def update_manager(
    db: Session, user: User, manager_id: int, data: ManagerUpdate
) -> Manager:
    """Apply a partial update to a manager's name and/or description.

    Raises:
        HTTPException 404: Manager does not exist.
        HTTPException 403: Caller is not a member, or the role policy
                           reserves this action to admins.
    """
    access = require_access(db, user, ENTITY_MANAGER, manager_id)
    ensure_action_allowed(access, ACTION_UPDATE_MANAGER)

    manager = access.manager
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)
    for field, value in update_data.items():
        setattr(manager, field, value)

    db.commit()
    logger.info("Manager updated id=%d fields=%s by user=%d", manager_id, sorted(update_data), user.id)
    return get_manager(db, user, manager_id)


def join_manager(db: Session, user: User, manager_id: int) -> Membership:
    """Add *user* to a manager with the ``miembro`` role.

    Raises:
        HTTPException 404: Manager does not exist.
        HTTPException 400: User is already a member.
    """
    manager = db.query(Manager).filter(Manager.id == manager_id).first()
    if manager is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Manager not found",
        )

    already_member_exception = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Already a member of this manager",
    )

    existing = (
        db.query(Membership)
        .filter(Membership.user_id == user.id, Membership.manager_id == manager_id)
        .first()
    )
    if existing is not None:
        raise already_member_exception

    membership = Membership(user_id=user.id, manager_id=manager_id, role=ROLE_MEMBER)
    db.add(membership)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise already_member_exception

    logger.info("User %d joined manager %d as '%s'", user.id, manager_id, ROLE_MEMBER)
    return membership
