"""Enumerations the lifecycle operates on.

Values are the exact strings stored in the database and sent over JSON.
"""

import enum


class RequestStatus(str, enum.Enum):
    """Position of a maintenance request in the status pipeline.

    Declaration order is pipeline order.
    """

    IN_QUEUE = "in_queue"
    VIEWED = "viewed"
    MAINTENANCE_REQUESTED = "maintenance_requested"
    IMPLEMENTING_ACTIONS = "implementing_actions"
    COMPLETED = "completed"


class Priority(str, enum.Enum):
    """Urgency of a request, independent of its pipeline position."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    EMERGENCY = "emergency"


class UpdatedByRole(str, enum.Enum):
    """Who performed the most recent status or priority change."""

    TENANT = "tenant"
    MANAGER = "manager"
    SYSTEM = "system"


class UserRole(str, enum.Enum):
    """Permission class of an account."""

    TENANT = "tenant"
    MANAGER = "manager"
    ADMIN = "admin"

    @property
    def is_staff(self) -> bool:
        """Managers and admins may read and mutate any request."""
        return self in (UserRole.MANAGER, UserRole.ADMIN)
