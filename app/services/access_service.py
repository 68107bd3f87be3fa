"""
Membership-based access control.

Every manager, month, income and expense belongs to exactly one manager; a
user may read or change it only if a ``Membership`` row links them to that
manager.  ``resolve_access`` walks the ownership chain
(Income/Expense → Month → Manager) and outer-joins the caller's membership in
a single query per entity type, so each check costs one round trip.

Design notes
------------
- ``resolve_access`` never raises; it returns ``None`` for a missing entity
  and an ``AccessResult`` with ``membership=None`` for a non-member, which
  keeps the rule testable without HTTP.
- ``require_access`` maps those outcomes to 404 and 403 respectively.
- Roles are stored but only consulted by ``ensure_action_allowed``, and only
  for the actions listed in ``settings.ADMIN_ONLY_ACTIONS``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import and_
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.expense import Expense
from app.models.income import Income
from app.models.manager import Manager
from app.models.membership import Membership
from app.models.month import Month
from app.models.user import User
from app.utils.constants import (
    ENTITY_EXPENSE,
    ENTITY_INCOME,
    ENTITY_MANAGER,
    ENTITY_MONTH,
    ROLE_ADMIN,
)

logger = logging.getLogger(__name__)

_NOT_FOUND_MESSAGES: dict[str, str] = {
    ENTITY_MANAGER: "Manager not found",
    ENTITY_MONTH: "Month not found",
    ENTITY_INCOME: "Income not found",
    ENTITY_EXPENSE: "Expense not found",
}

_ENTRY_MODELS: dict[str, Any] = {
    ENTITY_INCOME: Income,
    ENTITY_EXPENSE: Expense,
}


@dataclass
class AccessResult:
    """Outcome of walking an entity's ownership chain for one user.

    Attributes:
        manager_id: Manager that ultimately owns the entity.
        membership: The caller's membership in that manager, or ``None``.
        manager: Loaded manager (manager lookups only).
        month: Loaded month (month and entry lookups).
        entry: Loaded income or expense (entry lookups only).
    """

    manager_id: int
    membership: Membership | None
    manager: Manager | None = None
    month: Month | None = None
    entry: Income | Expense | None = None

    @property
    def is_member(self) -> bool:
        return self.membership is not None

    @property
    def role(self) -> str | None:
        return self.membership.role if self.membership is not None else None


def _membership_join(user_id: int, manager_id_column: Any) -> Any:
    return and_(
        Membership.manager_id == manager_id_column,
        Membership.user_id == user_id,
    )


def resolve_access(
    db: Session, user_id: int, entity_type: str, entity_id: int
) -> AccessResult | None:
    """Resolve which manager owns an entity and whether *user_id* is a member.

    Args:
        db: Active SQLAlchemy session.
        user_id: Primary key of the caller.
        entity_type: One of ``"manager"``, ``"month"``, ``"income"``,
                     ``"expense"``.
        entity_id: Primary key of the entity.

    Returns:
        ``None`` if the entity does not exist, otherwise an ``AccessResult``.

    Raises:
        ValueError: If *entity_type* is not recognised.
    """
    if entity_type == ENTITY_MANAGER:
        row = (
            db.query(Manager, Membership)
            .select_from(Manager)
            .outerjoin(Membership, _membership_join(user_id, Manager.id))
            .filter(Manager.id == entity_id)
            .first()
        )
        if row is None:
            return None
        manager, membership = row
        return AccessResult(
            manager_id=manager.id, membership=membership, manager=manager
        )

    if entity_type == ENTITY_MONTH:
        row = (
            db.query(Month, Membership)
            .select_from(Month)
            .outerjoin(Membership, _membership_join(user_id, Month.manager_id))
            .filter(Month.id == entity_id)
            .first()
        )
        if row is None:
            return None
        month, membership = row
        return AccessResult(
            manager_id=month.manager_id, membership=membership, month=month
        )

    model = _ENTRY_MODELS.get(entity_type)
    if model is None:
        raise ValueError(f"Unknown entity type: {entity_type!r}")

    row = (
        db.query(model, Month, Membership)
        .select_from(model)
        .join(Month, model.month_id == Month.id)
        .outerjoin(Membership, _membership_join(user_id, Month.manager_id))
        .filter(model.id == entity_id)
        .first()
    )
    if row is None:
        return None
    entry, month, membership = row
    return AccessResult(
        manager_id=month.manager_id,
        membership=membership,
        month=month,
        entry=entry,
    )


def require_access(
    db: Session, user: User, entity_type: str, entity_id: int
) -> AccessResult:
    """Like ``resolve_access`` but raise for missing entities and non-members.

    Raises:
        HTTPException 404: The entity does not exist.
        HTTPException 403: The caller is not a member of the owning manager.
    """
    access = resolve_access(db, user.id, entity_type, entity_id)
    if access is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=_NOT_FOUND_MESSAGES[entity_type],
        )
    if not access.is_member:
        logger.warning(
            "Access denied: user=%d %s=%d manager=%d",
            user.id, entity_type, entity_id, access.manager_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: not a member of this manager",
        )
    return access


def ensure_action_allowed(access: AccessResult, action: str) -> None:
    """Enforce the configurable admin-only policy for *action*.

    Raises:
        HTTPException 403: If *action* is reserved to admins and the caller's
                           role is not ``"admin"``.
    """
    if action not in get_settings().ADMIN_ONLY_ACTIONS:
        return
    if access.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Forbidden: '{action}' requires the admin role",
        )
