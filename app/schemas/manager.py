"""
Pydantic v2 schemas for managers (shared ledgers) and their members.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.auth import UserResponse
from app.schemas.common import CamelModel
from app.schemas.month import MonthResponse


class ManagerCreate(CamelModel):
    """Payload for ``POST /managers``."""

    name: str = Field(..., min_length=1, max_length=200, description="Ledger name")
    description: str | None = Field(
        default=None, max_length=1000, description="Optional description"
    )


class ManagerUpdate(CamelModel):
    """Payload for ``PATCH /managers/{id}``; only supplied fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)


class MemberResponse(CamelModel):
    """A membership row with the member's public profile."""

    user: UserResponse
    role: str
    created_at: datetime


class ManagerResponse(CamelModel):
    """Manager with its members and months (months carry their entries)."""

    id: int
    name: str
    description: str | None
    created_at: datetime
    members: list[MemberResponse] = Field(
        default_factory=list, validation_alias="memberships"
    )
    months: list[MonthResponse] = Field(default_factory=list)
