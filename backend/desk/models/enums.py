"""SQLAlchemy ENUM types for the database schema.

Values are the exact strings stored in the database and sent over JSON.
The lifecycle enums live with the lifecycle core and are re-exported here.
"""

import enum

from lifecycle.enums import Priority, RequestStatus, UpdatedByRole, UserRole

__all__ = [
    "PreferredTimeWindow",
    "Priority",
    "RequestStatus",
    "UpdatedByRole",
    "UserRole",
]


class PreferredTimeWindow(str, enum.Enum):
    """When the tenant would like the visit to happen."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANYTIME = "anytime"
