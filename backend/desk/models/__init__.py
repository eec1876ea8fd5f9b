"""SQLAlchemy models for the maintenance desk."""

from desk.models.base import Base, TimestampMixin, async_session_maker, get_async_session
from desk.models.enums import (
    PreferredTimeWindow,
    Priority,
    RequestStatus,
    UpdatedByRole,
    UserRole,
)
from desk.models.request import MaintenanceRequest
from desk.models.user import User

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "async_session_maker",
    "get_async_session",
    # Enums
    "PreferredTimeWindow",
    "Priority",
    "RequestStatus",
    "UpdatedByRole",
    "UserRole",
    # Models
    "MaintenanceRequest",
    "User",
]
