"""Membership model — links a user to a manager with a role."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Membership(Base):
    """Authorization record granting a user access to a manager.

    At most one row exists per (user, manager) pair.

    Attributes:
        id: Primary key.
        user_id: FK to User.
        manager_id: FK to Manager.
        role: ``"admin"`` for the creator, ``"miembro"`` for joiners.
        created_at: Timestamp of creation or join.
    """

    __tablename__ = "membership"
    __table_args__ = (
        UniqueConstraint("user_id", "manager_id", name="uq_membership_user_manager"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    manager_id = Column(Integer, ForeignKey("manager.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # "admin", "miembro"
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="memberships", lazy="select")
    manager = relationship("Manager", back_populates="memberships", lazy="select")
