"""Manager model — named ledger shared by its members."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Manager(Base):
    """Shared ledger grouping accounting months for a set of members.

    The creating user is stored as its first ``Membership`` with role
    ``"admin"``.

    Attributes:
        id: Primary key.
        name: Ledger name.
        description: Optional free-text description.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "manager"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    memberships = relationship(
        "Membership",
        back_populates="manager",
        lazy="select",
        cascade="all, delete-orphan",
    )
    months = relationship(
        "Month",
        back_populates="manager",
        order_by="Month.start_date.desc()",
        lazy="select",
        cascade="all, delete-orphan",
    )
