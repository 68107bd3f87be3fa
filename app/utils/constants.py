"""
Application-wide constants for the shared ledger API.

Defines domain enumerations, policy action names, and labels used across
routers, services, and models.
"""

from typing import Final

# ---------------------------------------------------------------------------
# Membership roles
# ---------------------------------------------------------------------------

ROLE_ADMIN: Final[str] = "admin"
ROLE_MEMBER: Final[str] = "miembro"

# ---------------------------------------------------------------------------
# Membership actions that can be reserved to admins (settings.ADMIN_ONLY_ACTIONS)
# ---------------------------------------------------------------------------

ACTION_UPDATE_MANAGER: Final[str] = "update_manager"
ACTION_CREATE_MONTH: Final[str] = "create_month"
ACTION_UPDATE_MONTH: Final[str] = "update_month"
ACTION_CLOSE_MONTH: Final[str] = "close_month"

POLICY_ACTIONS: Final[list[str]] = [
    ACTION_UPDATE_MANAGER,
    ACTION_CREATE_MONTH,
    ACTION_UPDATE_MONTH,
    ACTION_CLOSE_MONTH,
]

# ---------------------------------------------------------------------------
# Access-checked entity types
# ---------------------------------------------------------------------------

ENTITY_MANAGER: Final[str] = "manager"
ENTITY_MONTH: Final[str] = "month"
ENTITY_INCOME: Final[str] = "income"
ENTITY_EXPENSE: Final[str] = "expense"

# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

UNCATEGORIZED: Final[str] = "uncategorized"
