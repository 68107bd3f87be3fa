"""Month model — accounting period inside a manager (Open → Closed)."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Month(Base):
    """Accounting period holding income and expense entries.

    A month starts open.  Closing it sets ``closed`` and ``close_date``;
    nothing ever reopens it, and while closed neither the month's start date
    nor any of its entries may change.

    Attributes:
        id: Primary key.
        manager_id: FK to Manager.
        start_date: Start of the period.
        close_date: Date supplied when the month was closed.
        closed: Closed flag (monotonic false → true).
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "month"

    id = Column(Integer, primary_key=True, autoincrement=True)
    manager_id = Column(Integer, ForeignKey("manager.id"), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    close_date = Column(DateTime, nullable=True)
    closed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    manager = relationship("Manager", back_populates="months", lazy="select")
    incomes = relationship(
        "Income",
        back_populates="month",
        order_by="Income.date.desc()",
        lazy="select",
        cascade="all, delete-orphan",
    )
    expenses = relationship(
        "Expense",
        back_populates="month",
        order_by="Expense.date.desc()",
        lazy="select",
        cascade="all, delete-orphan",
    )
