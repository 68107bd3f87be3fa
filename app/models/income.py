"""Income model — money received within a month."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Income(Base):
    """Income entry.  Mutable only while its month is open.

    Attributes:
        id: Primary key.
        month_id: FK to Month.
        amount: Strictly positive amount.
        description: Non-empty description.
        date: When the income happened (defaults to creation time).
        created_at: Record creation timestamp.
    """

    __tablename__ = "income"

    id = Column(Integer, primary_key=True, autoincrement=True)
    month_id = Column(Integer, ForeignKey("month.id"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(500), nullable=False)
    date = Column(DateTime, default=func.now(), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    month = relationship("Month", back_populates="incomes", lazy="select")
