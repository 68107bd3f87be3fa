"""SQLAlchemy models package for the shared ledger API.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` or Alembic migrations run.
The import order follows the foreign-key dependency graph so that parent
tables are always registered before their children.

Usage from other modules:
    from app.models import Manager, Month
"""

# Identity
from app.models.user import User  # noqa: F401

# Shared ledgers and who can access them
from app.models.manager import Manager  # noqa: F401
from app.models.membership import Membership  # noqa: F401

# Accounting periods and their entries
from app.models.month import Month  # noqa: F401
from app.models.income import Income  # noqa: F401
from app.models.expense import Expense  # noqa: F401

__all__ = [
    "User",
    "Manager",
    "Membership",
    "Month",
    "Income",
    "Expense",
]
