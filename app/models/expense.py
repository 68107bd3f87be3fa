"""Expense model — money spent within a month, optionally categorised."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Expense(Base):
    """Expense entry.  Mutable only while its month is open.

    Attributes:
        id: Primary key.
        month_id: FK to Month.
        amount: Strictly positive amount.
        description: Non-empty description.
        category: Optional free-text label used by the statistics breakdown.
        date: When the expense happened (defaults to creation time).
        created_at: Record creation timestamp.
    """

    __tablename__ = "expense"

    id = Column(Integer, primary_key=True, autoincrement=True)
    month_id = Column(Integer, ForeignKey("month.id"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(500), nullable=False)
    category = Column(String(100), nullable=True)
    date = Column(DateTime, default=func.now(), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    month = relationship("Month", back_populates="expenses", lazy="select")
